from decimal import Decimal

import pytest

from jewelry_catalog.service.pricing import calculate_final_price


def test_discount_is_subtracted():
    assert calculate_final_price(Decimal('50000'), Decimal('15')) == (
        Decimal('42500')
    )


def test_zero_offer_returns_base_price():
    assert calculate_final_price(Decimal('1999.99'), 0) == Decimal('1999.99')
    assert calculate_final_price('1999.99', None) == Decimal('1999.99')


def test_full_discount():
    assert calculate_final_price(Decimal('120.50'), 100) == Decimal('0')


def test_result_rounds_half_up_to_cents():
    # 10.05 * 0.95 = 9.5475
    assert str(calculate_final_price('10.05', '5')) == '9.55'


@pytest.mark.parametrize('offer', [-1, Decimal('100.01')])
def test_offer_out_of_range(offer):
    with pytest.raises(ValueError):
        calculate_final_price(Decimal('100'), offer)
