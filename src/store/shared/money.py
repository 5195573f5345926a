"""Money value object: exact fixed-point amounts with two fractional digits.

Amounts are held as an integer number of cents, so sums and products never
pass through binary floating point. Parsing refuses anything that would need
rounding to fit two decimal places.
"""

from decimal import Decimal, InvalidOperation

from protean.exceptions import ValidationError
from protean.fields import Integer

from store.domain import store

CENT_EXPONENT = 2


@store.value_object
class Money:
    """A signed monetary amount in the store currency."""

    cents = Integer(required=True)

    @classmethod
    def zero(cls):
        return cls(cents=0)

    @classmethod
    def parse(cls, value):
        """Build Money from a string, integer or Decimal such as ``"799.90"``.

        Floats are rejected outright: by the time a float reaches us the
        amount may already be misstated.
        """
        if isinstance(value, Money):
            return value
        if isinstance(value, bool | float) or not isinstance(value, str | int | Decimal):
            raise ValidationError({"amount": [f"Unsupported amount type: {type(value).__name__}"]})

        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError({"amount": [f"Not a decimal amount: {value!r}"]}) from None

        if not amount.is_finite():
            raise ValidationError({"amount": [f"Not a finite amount: {value!r}"]})

        cents = amount.scaleb(CENT_EXPONENT)
        if cents != cents.to_integral_value():
            raise ValidationError({"amount": [f"At most {CENT_EXPONENT} decimal places allowed: {value!r}"]})

        return cls(cents=int(cents))

    @property
    def amount(self) -> Decimal:
        return Decimal(self.cents).scaleb(-CENT_EXPONENT)

    @property
    def is_negative(self) -> bool:
        return self.cents < 0

    def __add__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return Money(cents=self.cents + other.cents)

    def __radd__(self, other):
        # Lets the builtin sum() start from 0
        if other == 0:
            return self
        return self.__add__(other)

    def __mul__(self, quantity):
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            return NotImplemented
        return Money(cents=self.cents * quantity)

    __rmul__ = __mul__

    def __lt__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents < other.cents

    def __le__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents <= other.cents

    def __gt__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents > other.cents

    def __ge__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents >= other.cents

    def __str__(self):
        return f"{self.amount:.{CENT_EXPONENT}f}"
