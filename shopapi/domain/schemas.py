# shopapi/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, PlainSerializer
from typing import Annotated, List, Optional
from decimal import Decimal
from datetime import datetime


# kolumny INTEGER; wieksze wartosci nie mieszcza sie w sqlite/postgres
MAX_INT = 2_147_483_647

# Decimal w bazie, liczba w JSON (tak jak w starym API)
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ---------------------------------------------------------------- auth

class RegisterIn(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    username: str = Field(..., min_length=3, max_length=50, examples=["johndoe"])
    email: EmailStr = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=6, max_length=72, examples=["secret123"])


class RegisterOut(BaseModel):
    message: str
    user_id: int = Field(..., serialization_alias="userId")


class LoginIn(BaseModel):
    email: str = Field(..., min_length=1, examples=["john@example.com"])
    password: str = Field(..., min_length=1, examples=["secret123"])


class LegacyLoginIn(BaseModel):
    """Stary endpoint /api/login z demo."""

    username: str = ""
    password: str = ""


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    message: str
    token: str
    user: UserRead


class AuthUser(BaseModel):
    """Claims z tokena JWT."""

    id: int
    username: str
    role: str = "customer"


class MessageOut(BaseModel):
    message: str


# ---------------------------------------------------------------- catalog

class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Sports"])
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$", examples=["sports"])
    description: Optional[str] = Field(None, examples=["Sports equipment and accessories"])


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryCreatedOut(BaseModel):
    message: str
    category_id: int = Field(..., serialization_alias="categoryId")


class ProductFilter(BaseModel):
    """Filtry listy produktow (wszystkie opcjonalne)."""

    category: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Gaming Mouse"])
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, examples=[49.99])
    stock: int = Field(..., ge=0, le=MAX_INT, examples=[100])
    category_id: Optional[int] = Field(None, gt=0, le=MAX_INT, examples=[1])
    image_url: Optional[str] = Field(None, max_length=500)


class ProductUpdate(BaseModel):
    """Czesciowa aktualizacja - pola niewyslane zostaja bez zmian."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0, le=MAX_INT)
    category_id: Optional[int] = Field(None, gt=0, le=MAX_INT)
    image_url: Optional[str] = Field(None, max_length=500)


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Money
    stock: int
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductMessageOut(BaseModel):
    message: str
    product: ProductOut


# ---------------------------------------------------------------- cart

class CartAddIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: Optional[int] = Field(None, gt=0, le=MAX_INT, description="ID produktu", examples=[1])
    quantity: int = Field(1, ge=1, le=MAX_INT, description="Ilosc (domyslnie 1)", examples=[2])
    item: Optional[str] = Field(None, description="Legacy field kept for old browser tests")


class CartLineOut(BaseModel):
    """Linia koszyka (response)."""

    id: int
    product_id: int
    name: str
    price: Money
    image_url: Optional[str] = None
    quantity: int
    subtotal: Money
    added_at: datetime


class CartOut(BaseModel):
    items: List[CartLineOut]
    total: Money
    count: int


class CartAddedLineOut(BaseModel):
    id: int
    quantity: int
    name: str
    price: Money


class CartAddedOut(BaseModel):
    message: str
    current_cart: List[CartAddedLineOut | str] = Field(..., serialization_alias="currentCart")


# ---------------------------------------------------------------- orders

class CheckoutIn(BaseModel):
    """Schema dla checkoutu (user_id opcjonalny)."""

    user_id: Optional[int] = Field(None, gt=0, le=MAX_INT, examples=[1])


class CheckoutOut(BaseModel):
    message: str
    order_id: int = Field(..., serialization_alias="orderId")
    total: Money


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: Optional[int] = None
    status: str
    total: Money
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderLineOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    image_url: Optional[str] = None
    quantity: int
    unit_price: Money
    subtotal: Money


class OrderDetailOut(OrderOut):
    items: List[OrderLineOut]


class OrderStatusIn(BaseModel):
    status: str = Field(..., examples=["shipped"])


class OrderStatusOut(BaseModel):
    message: str
    order_id: int = Field(..., serialization_alias="orderId")
    status: str


# ---------------------------------------------------------------- health

class HealthOut(BaseModel):
    status: str
    database: str
    timestamp: datetime
