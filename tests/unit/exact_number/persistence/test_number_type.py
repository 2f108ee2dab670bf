from decimal import Decimal

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.exc import StatementError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from exact_number import NotANumberError, Number
from exact_number.persistence import NumberType


class Base(DeclarativeBase):
    pass


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True)
    amount: Mapped[Number] = mapped_column(NumberType(decimals=2))
    rate: Mapped[Number | None] = mapped_column(NumberType.with_decimals(4), nullable=True)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


def test_numbers_round_trip_through_database(engine):
    with Session(engine) as session:
        session.add(Payment(id=1, amount=Number.of("12.345", 3), rate=Number.of("7.45")))
        session.add(Payment(id=2, amount=Number.of("-0.5"), rate=None))
        session.commit()

    with Session(engine) as session:
        first, second = session.scalars(select(Payment).order_by(Payment.id)).all()

        # Read back at the column's own scale
        assert first.amount == Number.of("12.35")
        assert first.amount.decimals == 2
        assert first.rate.value == "7.45"
        assert first.rate.decimals == 4
        assert second.amount.value == "-0.5"
        assert second.rate is None


def test_storing_non_number_fails(engine):
    with Session(engine) as session:
        session.add(Payment(id=1, amount="12.00"))

        with pytest.raises(StatementError) as exc_info:
            session.commit()

    assert isinstance(exc_info.value.orig, NotANumberError)


def test_bind_param_uses_canonical_string():
    column_type = NumberType()

    assert column_type.process_bind_param(Number.of("10.50"), dialect=None) == "10.5"
    assert column_type.process_bind_param(None, dialect=None) is None
    with pytest.raises(NotANumberError):
        column_type.process_bind_param(10.5, dialect=None)


@pytest.mark.parametrize(
    "stored, decimals, expected",
    [("1.005", 2, "1.01"), (Decimal("1.005"), 2, "1.01"), (1.5, 2, "1.5"), ("3.14159", 4, "3.1416"), (7, 0, "7")],
)
def test_result_value_uses_configured_scale(stored, decimals: int, expected: str):
    number = NumberType.with_decimals(decimals).process_result_value(stored, dialect=None)

    assert number.value == expected
    assert number.decimals == decimals


def test_result_value_keeps_null():
    assert NumberType().process_result_value(None, dialect=None) is None


@pytest.mark.parametrize("decimals", [-1, 1.5, True, "2", None])
def test_invalid_decimals_are_rejected(decimals):
    with pytest.raises(ValueError):
        NumberType(decimals=decimals)
