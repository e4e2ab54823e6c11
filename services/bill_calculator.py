# services/bill_calculator.py
"""
Bill Calculator - derives the monetary fields of a bill.

Formulas:
     net_rent         = rent - discounts
     electricity_cost = (end_meter - start_meter) * rate + meter_fee
     water_cost       = (end_meter - start_meter) * rate + meter_fee
     grand_total      = net_rent + electricity_cost + water_cost
                        + aircon_fee + fridge_fee + other_fees

Rounding: each component is computed exactly with Decimal and quantized
once to 0.01 (ROUND_HALF_UP). grand_total is the exact sum of the
quantized components, so the stored fields always add up.

Discounts and other fees come in two shapes: a single legacy amount
(ScalarCharge) or a list of described items (ItemizedCharges). Both are
reduced to one total before use.

Everything here is pure: no session, no I/O. Input validation happens
in services.bill_validation before these functions are called.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Union

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
     """Convert ints, strings and floats to Decimal without binary float noise."""
     if value is None:
          return ZERO
     if isinstance(value, Decimal):
          return value
     if isinstance(value, float):
          return Decimal(repr(value))
     return Decimal(value)


def quantize_money(value: Decimal) -> Decimal:
     return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineItem:
     description: str
     amount: Decimal


@dataclass(frozen=True)
class ScalarCharge:
     """Legacy single-number discount or fee."""
     amount: Decimal = ZERO


@dataclass(frozen=True)
class ItemizedCharges:
     """Described discount or fee entries, in submitted order."""
     items: tuple[LineItem, ...] = ()


Charge = Union[ScalarCharge, ItemizedCharges]


def as_charge(value: Any) -> Charge:
     """
     Normalize the accepted external shapes into a Charge.

     - None -> ScalarCharge(0)
     - a number -> ScalarCharge(number)
     - an iterable of LineItem, dicts with description/amount, objects
       with description/amount attributes, or (description, amount)
       pairs -> ItemizedCharges
     """
     if isinstance(value, (ScalarCharge, ItemizedCharges)):
          return value
     if value is None:
          return ScalarCharge()
     if isinstance(value, (int, float, str, Decimal)):
          return ScalarCharge(to_decimal(value))

     items = []
     for entry in value:
          if isinstance(entry, LineItem):
               items.append(entry)
          elif isinstance(entry, dict):
               items.append(LineItem(entry.get("description", ""), to_decimal(entry.get("amount"))))
          elif isinstance(entry, (tuple, list)):
               description, amount = entry
               items.append(LineItem(description, to_decimal(amount)))
          else:
               items.append(LineItem(entry.description, to_decimal(entry.amount)))
     return ItemizedCharges(tuple(items))


def charge_total(charge: Charge) -> Decimal:
     """Reduce either charge shape to its scalar total (unrounded)."""
     if isinstance(charge, ScalarCharge):
          return to_decimal(charge.amount)
     return sum((to_decimal(item.amount) for item in charge.items), ZERO)


@dataclass(frozen=True)
class MeterReading:
     start_meter: Decimal
     end_meter: Decimal
     rate: Decimal
     meter_fee: Decimal = ZERO

     @property
     def usage(self) -> Decimal:
          return to_decimal(self.end_meter) - to_decimal(self.start_meter)


@dataclass(frozen=True)
class BillCharges:
     """Raw charge inputs of a single bill."""
     rent: Decimal
     electricity: MeterReading
     water: MeterReading
     discounts: Charge = field(default_factory=ScalarCharge)
     aircon_fee: Decimal = ZERO
     fridge_fee: Decimal = ZERO
     other_fees: Charge = field(default_factory=ScalarCharge)


@dataclass(frozen=True)
class BillTotals:
     """Derived fields of a bill, all quantized to cents."""
     discount_total: Decimal
     net_rent: Decimal
     electricity_cost: Decimal
     water_cost: Decimal
     other_fees_total: Decimal
     grand_total: Decimal


def utility_cost(reading: MeterReading) -> Decimal:
     """(end - start) * rate + meter_fee, rounded to cents."""
     return quantize_money(reading.usage * to_decimal(reading.rate) + to_decimal(reading.meter_fee))


def calculate_bill(charges: BillCharges) -> BillTotals:
     """
     Compute the derived fields for one bill.

     Negative results (a discount larger than the rent) are returned
     unchanged; deciding what to do with them is up to the caller.
     """
     discount_total = quantize_money(charge_total(charges.discounts))
     other_fees_total = quantize_money(charge_total(charges.other_fees))
     net_rent = quantize_money(to_decimal(charges.rent) - charge_total(charges.discounts))
     electricity_cost = utility_cost(charges.electricity)
     water_cost = utility_cost(charges.water)
     aircon_fee = quantize_money(to_decimal(charges.aircon_fee))
     fridge_fee = quantize_money(to_decimal(charges.fridge_fee))

     grand_total = (
          net_rent
          + electricity_cost
          + water_cost
          + aircon_fee
          + fridge_fee
          + other_fees_total
     )

     return BillTotals(
          discount_total=discount_total,
          net_rent=net_rent,
          electricity_cost=electricity_cost,
          water_cost=water_cost,
          other_fees_total=other_fees_total,
          grand_total=grand_total,
     )


def _items_of(entries: Iterable) -> ItemizedCharges:
     return ItemizedCharges(tuple(LineItem(e.description, to_decimal(e.amount)) for e in entries))


def charges_from_bill(bill) -> BillCharges:
     """Read the raw charge columns of a models.Bill into BillCharges."""
     return BillCharges(
          rent=to_decimal(bill.rent),
          electricity=MeterReading(
               start_meter=to_decimal(bill.electricity_start_meter),
               end_meter=to_decimal(bill.electricity_end_meter),
               rate=to_decimal(bill.electricity_rate),
               meter_fee=to_decimal(bill.electricity_meter_fee),
          ),
          water=MeterReading(
               start_meter=to_decimal(bill.water_start_meter),
               end_meter=to_decimal(bill.water_end_meter),
               rate=to_decimal(bill.water_rate),
               meter_fee=to_decimal(bill.water_meter_fee),
          ),
          discounts=_items_of(bill.discounts),
          aircon_fee=to_decimal(bill.aircon_fee),
          fridge_fee=to_decimal(bill.fridge_fee),
          other_fees=_items_of(bill.other_fees),
     )


def apply_to_bill(bill) -> BillTotals:
     """Recompute and store the derived fields on a models.Bill."""
     totals = calculate_bill(charges_from_bill(bill))
     bill.net_rent = totals.net_rent
     bill.electricity_cost = totals.electricity_cost
     bill.water_cost = totals.water_cost
     bill.other_fees_total = totals.other_fees_total
     bill.grand_total = totals.grand_total
     return totals
