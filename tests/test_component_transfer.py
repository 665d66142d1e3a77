import pytest

from svgfx.component_transfer import (
    ComponentTransfer,
    Discrete,
    Gamma,
    Identity,
    Linear,
    Table,
    apply,
    is_dummy,
    transfer,
)
from svgfx.image import ImageRef, Rgba


@pytest.mark.parametrize(
    "func, expected",
    [
        (Identity(), True),
        (Table(()), True),
        (Discrete(()), True),
        (Table((0.0, 1.0)), False),
        (Linear(1.0, 0.0), False),
        (Gamma(), False),
    ],
)
def test_is_dummy(func, expected):
    assert is_dummy(func) is expected


def test_table_endpoints():
    func = Table((0.0, 1.0))
    assert transfer(func, 0) == 0
    assert transfer(func, 255) == 255


def test_inverted_table():
    func = Table((1.0, 0.0))
    assert transfer(func, 0) == 255
    assert transfer(func, 255) == 0


def test_single_entry_table_is_constant():
    func = Table((1.0,))
    assert transfer(func, 0) == transfer(func, 100) == 255


def test_discrete_endpoints():
    func = Discrete((0.0, 1.0))
    assert transfer(func, 0) == 0
    assert transfer(func, 255) == 255


def test_discrete_is_monotonic():
    func = Discrete((0.0, 0.5, 1.0))
    values = [transfer(func, c) for c in range(256)]
    assert values == sorted(values)
    assert len(set(values)) == 3


def test_linear_clamps_to_range():
    assert transfer(Linear(0.0, 2.0), 10) == 255
    assert transfer(Linear(0.0, -1.0), 10) == 0


def test_linear_inversion_of_zero():
    assert transfer(Linear(-1.0, 1.0), 0) == 255


def test_gamma_one_at_full():
    assert transfer(Gamma(1.0, 1.0, 0.0), 255) == 255


def test_gamma_negative_exponent_at_zero_clamps():
    assert transfer(Gamma(1.0, -1.0, 0.0), 0) == 255


def test_apply_only_changes_active_channels():
    pixels = [Rgba(10, 20, 30, 40), Rgba(50, 60, 70, 80)]
    image = ImageRef(2, 1, list(pixels))
    apply(ComponentTransfer(func_a=Discrete((1.0,))), image)
    assert [(p.r, p.g, p.b) for p in image.data] == [(p.r, p.g, p.b) for p in pixels]
    assert [p.a for p in image.data] == [255, 255]


def test_apply_with_all_dummies_keeps_image():
    pixels = [Rgba(1, 2, 3, 4)]
    image = ImageRef(1, 1, list(pixels))
    apply(ComponentTransfer(func_r=Table(()), func_g=Discrete(())), image)
    assert image.data == pixels