"""Ingredient consolidation for shopping lists.

Ingredient lines gathered from several meals are merged into one entry per
ingredient id. Lines with a quantity and no note are summed per unit string
(no conversion between units); lines carrying a note are kept as separate
fragments. The merged entries are ordered by the store walking order.
"""

import logging
from collections.abc import Iterable, Mapping

from whats_cookin.domain.ingredients import (
    SECTION_ORDER,
    Ingredient,
    IngredientLine,
    StoreSection,
)
from whats_cookin.domain.shopping import ConsolidatedIngredient, IngredientAmount

logger = logging.getLogger(__name__)

COUNT_UNIT = "count"
EMPTY_QUANTITY = "—"
FRAGMENT_SEPARATOR = " + "
QUANTITY_PRECISION = 4

_SECTION_RANK = {section: rank for rank, section in enumerate(SECTION_ORDER)}


def fallback_ingredient(reference: str) -> Ingredient:
    """Stand-in catalog entry for a line whose ingredient no longer exists."""
    return Ingredient(
        id=reference,
        name=reference,
        display_name=reference,
        store_section=StoreSection.PANTRY,
        default_unit="",
        is_common_item=False,
        created_at=None,
        last_used=None,
    )


def resolve_amounts(
    lines: Iterable[IngredientLine], catalog: Mapping[str, Ingredient]
) -> list[IngredientAmount]:
    """Attach catalog attributes to each ingredient line."""
    amounts: list[IngredientAmount] = []
    for line in lines:
        ingredient = catalog.get(line.ingredient_id)
        if ingredient is None:
            logger.warning(
                "Ingredient %s missing from catalog, using fallback",
                line.ingredient_id,
            )
            ingredient = fallback_ingredient(line.ingredient_id)
        amounts.append(
            IngredientAmount(
                ingredient_id=line.ingredient_id,
                name=ingredient.name,
                display_name=ingredient.display_name,
                store_section=ingredient.store_section,
                is_common_item=ingredient.is_common_item,
                quantity=line.quantity,
                unit=line.unit,
                notes=line.notes,
            )
        )
    return amounts


def consolidate(
    amounts: Iterable[IngredientAmount], exclude_common_items: bool = False
) -> list[ConsolidatedIngredient]:
    """Merge amounts per ingredient id and sort them by store section."""
    grouped: dict[str, list[IngredientAmount]] = {}
    for amount in amounts:
        grouped.setdefault(amount.ingredient_id, []).append(amount)

    merged: list[ConsolidatedIngredient] = []
    for ingredient_id, group in grouped.items():
        first = group[0]
        if exclude_common_items and first.is_common_item:
            continue
        merged.append(
            ConsolidatedIngredient(
                ingredient_id=ingredient_id,
                display_name=first.display_name,
                combined_quantity=combine_quantities(group),
                store_section=first.store_section,
            )
        )
    return sorted(merged, key=_walk_order)


def combine_quantities(amounts: Iterable[IngredientAmount]) -> str:
    """Build the display string for one ingredient's amounts."""
    by_unit: dict[str, float] = {}
    annotated: list[str] = []
    for amount in amounts:
        if amount.notes:
            annotated.append(_annotated_fragment(amount))
        elif amount.quantity is not None:
            unit = amount.unit.strip() or COUNT_UNIT
            by_unit[unit] = by_unit.get(unit, 0.0) + amount.quantity
        # A line with neither quantity nor note contributes nothing.

    fragments = [_measure(quantity, unit) for unit, quantity in by_unit.items()]
    fragments.extend(annotated)
    if not fragments:
        return EMPTY_QUANTITY
    return FRAGMENT_SEPARATOR.join(fragments)


def format_quantity(value: float) -> str:
    """Render a decimal without float noise or a trailing ``.0``."""
    rounded = round(float(value), QUANTITY_PRECISION)
    if rounded.is_integer():
        return str(int(rounded))
    return str(rounded)


def _measure(quantity: float, unit: str) -> str:
    if unit == COUNT_UNIT:
        return format_quantity(quantity)
    return f"{format_quantity(quantity)} {unit}"


def _annotated_fragment(amount: IngredientAmount) -> str:
    if amount.quantity is None:
        return amount.notes
    unit = amount.unit.strip()
    measure = format_quantity(amount.quantity)
    if unit:
        measure = f"{measure} {unit}"
    return f"{measure} ({amount.notes})"


def _walk_order(entry: ConsolidatedIngredient) -> tuple[int, str, str]:
    return (
        _SECTION_RANK.get(entry.store_section, len(_SECTION_RANK)),
        entry.display_name.casefold(),
        entry.ingredient_id,
    )
