"""Sample DTOs covering every field kind the generator understands."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, ClassVar, List, Optional, Union

from dto_openapi.constraints import IsEmail, IsUrl, IsUuid, Length, NotEmpty, Pattern, Range


# ============================================================================
# ENUMS
# ============================================================================


class StatusEnum(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class Letter(Enum):
    A = 1
    B = 2
    C = 3


class Priority(int, Enum):
    LOW = 1
    HIGH = 2


# ============================================================================
# FLAT AND NESTED DTOS
# ============================================================================


@dataclass
class ExampleDto:
    name: Annotated[str, NotEmpty(), Length(min=3, max=100)]
    email: Annotated[str, IsEmail()]
    age: int = field(default=18, metadata={"constraints": [Range(min=18, max=120)]})
    optional: Optional[str] = None


@dataclass
class AddressDto:
    street: Annotated[str, NotEmpty()]
    city: Annotated[str, NotEmpty()]
    zipCode: Annotated[str, NotEmpty(), Length(min=5, max=10)]
    country: Optional[str] = None


class ComplexDto:
    """
    Aggregate with nested objects.

    :type addresses: list[AddressDto]
    """

    VERSION: ClassVar[int] = 1

    id: Annotated[str, IsUuid()]
    name: str
    status: StatusEnum
    primaryAddress: AddressDto
    addresses: list
    tags: List[str]
    billingAddress: Optional[AddressDto]
    createdAt: datetime
    _internal: int


@dataclass
class ProfileDto:
    nickname: Annotated[Optional[str], NotEmpty()] = None
    code: Annotated[str, NotEmpty(), Pattern(regex=r"^[A-Z]{3}$")] = "ABC"
    website: Annotated[Optional[str], IsUrl()] = None
    priority: Priority = Priority.LOW
    letter: Letter = Letter.A


# ============================================================================
# CYCLES
# ============================================================================


@dataclass
class TreeNode:
    name: str
    children: List["TreeNode"] = field(default_factory=list)
    parent: Optional["TreeNode"] = None


@dataclass
class Author:
    name: str
    books: List["Book"] = field(default_factory=list)


@dataclass
class Book:
    title: str
    author: Optional[Author] = None


# ============================================================================
# UNIONS
# ============================================================================


@dataclass
class CardPayment:
    number: str


@dataclass
class BankPayment:
    iban: str


@dataclass
class PaymentDto:
    method: Union[CardPayment, BankPayment]
    amount: Union[int, float]
    note: Optional[Union[str, int]] = None
    fallback: Optional[CardPayment] = None


class LegacyDto:
    def __init__(self, items, labels):
        """
        Args:
            items (list[AddressDto]): Delivery addresses
            labels (List[str]): Free-form labels
        """
        self.items = items
        self.labels = labels

    items: list
    labels: list
