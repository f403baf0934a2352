from decimal import Decimal, ROUND_HALF_UP

import jewelry_catalog.constants as c

HUNDRED = Decimal(100)
CENTS = Decimal(1).scaleb(-c.PRODUCT_PRICE_SCALE)


def calculate_final_price(base_price, offer_percentage=None) -> Decimal:
    """
    Цена со скидкой: base - base * offer / 100, округление до копеек.
    При нулевой скидке возвращается базовая цена без изменений.
    """
    base_price = Decimal(str(base_price))
    offer = Decimal(str(offer_percentage or 0))
    if offer == 0:
        return base_price
    if not (
        c.PRODUCT_MIN_OFFER_PERCENTAGE <= offer
        <= c.PRODUCT_MAX_OFFER_PERCENTAGE
    ):
        raise ValueError(
            f'Offer percentage must be between '
            f'{c.PRODUCT_MIN_OFFER_PERCENTAGE} and '
            f'{c.PRODUCT_MAX_OFFER_PERCENTAGE}, got {offer}'
        )
    discount = base_price * offer / HUNDRED
    return (base_price - discount).quantize(CENTS, rounding=ROUND_HALF_UP)
