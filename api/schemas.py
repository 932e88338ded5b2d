"""Request models for the wholesale API"""

from decimal import Decimal
from typing import List
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from services.reconciliation import CartItem

# Upper bound for any amount accepted from clients
MAX_AMOUNT = Decimal("1000000000")


def product_id_as_string(value):
    # Storefront product ids arrive as numbers
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError("product id must be a string or integer")
    value = str(value).strip()
    if not value:
        raise ValueError("product id must not be blank")
    return value


class CartItemIn(BaseModel):
    product_id: str = Field(validation_alias=AliasChoices("product_id", "productId"))
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0, le=MAX_AMOUNT)

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_product_id(cls, value):
        return product_id_as_string(value)

    def to_cart_item(self) -> CartItem:
        return CartItem(product_id=self.product_id, quantity=self.quantity, price=self.price)


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_email: str = Field(alias="customerEmail", min_length=1)
    cart_items: List[CartItemIn] = Field(alias="cartItems")
    cart_total: Decimal = Field(alias="cartTotal", ge=0, le=MAX_AMOUNT)

    @field_validator("customer_email")
    @classmethod
    def strip_email(cls, value: str) -> str:
        return value.strip()


class WholesaleCustomerIn(BaseModel):
    email: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def strip_email(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("email must not be blank")
        return value


class WholesalePriceIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    price: Decimal = Field(ge=0, le=MAX_AMOUNT)

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_product_id(cls, value):
        return product_id_as_string(value)
