"""
Cart line pricing and configuration resolution.

A line's final price is the product's base price plus the salad overage
surcharge. Generic options never change the price, they only feed the display
name and the completeness check. Everything here is pure: callers hand in a
ProductSnapshot (built from the catalog or by hand in tests) and get a
ResolvedLine back.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence, Union

from core_backend.errors import DomainError

DISPLAY_SEPARATOR = " • "
CENT = Decimal("0.01")

Selection = Union[str, List[str]]


class LineValidationError(DomainError):
    """A cart line is incomplete or references something the product does not offer."""

    code = "invalid_customization"
    kind = "invalid-argument"

    def __init__(self, product_name: str, errors: Sequence[str]):
        self.product_name = product_name
        self.errors = list(errors)
        super().__init__(
            f"{product_name}: {'; '.join(self.errors)}",
            product=product_name,
            errors=self.errors,
        )


@dataclass(frozen=True)
class SaladConfig:
    enabled: bool = False
    included: int = 0
    extra_price: Decimal = Decimal("0.00")
    items: tuple = ()


@dataclass(frozen=True)
class OptionConfig:
    key: str
    label: str
    type: str = "single"
    required: bool = False
    items: tuple = ()

    @property
    def is_multi(self) -> bool:
        return self.type == "multi"


@dataclass(frozen=True)
class ProductSnapshot:
    id: Optional[int]
    name: str
    price: Decimal
    active: bool = True
    category: Optional[str] = None
    salads: Optional[SaladConfig] = None
    options: tuple = ()

    @property
    def salads_enabled(self) -> bool:
        return bool(self.salads and self.salads.enabled)

    @property
    def is_configurable(self) -> bool:
        return self.salads_enabled or len(self.options) > 0

    @classmethod
    def from_product(cls, product) -> "ProductSnapshot":
        """Freeze a catalog Product (with its salad config and options) into a snapshot."""
        salads = None
        salad_config = getattr(product, "salad_config", None)
        if salad_config is not None:
            salads = SaladConfig(
                enabled=salad_config.enabled,
                included=salad_config.included,
                extra_price=Decimal(salad_config.extra_price),
                items=tuple(salad_config.items or ()),
            )

        options = tuple(
            OptionConfig(
                key=opt.key,
                label=opt.label,
                type=opt.selection_type,
                required=opt.is_required,
                items=tuple(opt.items or ()),
            )
            for opt in product.options.all()
        )

        return cls(
            id=product.pk,
            name=product.name,
            price=Decimal(product.price),
            active=product.is_active,
            category=product.category.name if product.category_id else None,
            salads=salads,
            options=options,
        )


@dataclass
class ResolvedLine:
    product_id: Optional[int]
    name: str
    final_price: Decimal
    display_name: str
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    selections: Dict[str, Selection] = field(default_factory=dict)
    salads: List[str] = field(default_factory=list)

    @property
    def is_customized(self) -> bool:
        return bool(self.selections or self.salads)

    def as_order_item(self) -> dict:
        """Shape stored on the order: name, displayName, price and the custom block."""
        item = {
            "product_id": self.product_id,
            "name": self.name,
            "display_name": self.display_name,
            "price": self.final_price,
        }
        if self.is_customized:
            item["custom"] = {"selections": self.selections, "salads": self.salads}
        return item


def _quantize(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def _is_present(option: OptionConfig, value) -> bool:
    if option.is_multi:
        return isinstance(value, (list, tuple)) and len(value) > 0
    return isinstance(value, str) and value != ""


def is_well_formed_selection(value) -> bool:
    """A selection is one string or a list of strings."""
    if isinstance(value, (list, tuple)):
        return all(isinstance(v, str) for v in value)
    return isinstance(value, str)


def is_well_formed_customization(salads, selections) -> bool:
    if not isinstance(salads, (list, tuple)) or not all(isinstance(s, str) for s in salads):
        return False
    if not isinstance(selections, dict):
        return False
    return all(is_well_formed_selection(value) for value in selections.values())


def _normalize_selection(option: OptionConfig, value):
    if option.is_multi:
        if isinstance(value, str):
            return [value] if value else []
        return list(value or [])
    if isinstance(value, (list, tuple)):
        return value[0] if value else ""
    return value or ""


def _describe(option: OptionConfig, value) -> str:
    if option.is_multi:
        return f"{option.label}: {', '.join(value)}"
    return f"{option.label}: {value}"


def resolve_line(
    product: ProductSnapshot,
    salad_selections: Optional[Sequence[str]] = None,
    option_selections: Optional[Dict[str, Selection]] = None,
) -> ResolvedLine:
    """
    Compute the final price, display name and validity of one cart line.

    A product without enabled salads and without options is not configurable:
    the result is its base price and bare name whatever arguments are passed.
    """
    base_price = _quantize(product.price)

    if not product.is_configurable:
        return ResolvedLine(
            product_id=product.id,
            name=product.name,
            final_price=base_price,
            display_name=product.name,
            is_valid=True,
        )

    errors: List[str] = []
    option_selections = option_selections or {}
    chosen: Dict[str, Selection] = {}
    summary: List[str] = []

    for option in product.options:
        raw = option_selections.get(option.key)
        if raw is not None and not is_well_formed_selection(raw):
            errors.append(f"Invalid choice(s) for '{option.label}'.")
            continue
        value = _normalize_selection(option, raw)
        if not _is_present(option, value):
            if option.required:
                errors.append(f"A selection is required for '{option.label}'.")
            continue

        offered = set(option.items)
        picked = value if option.is_multi else [value]
        unknown = [v for v in picked if offered and v not in offered]
        if unknown:
            errors.append(f"Invalid choice(s) for '{option.label}': {', '.join(unknown)}.")
            continue

        chosen[option.key] = value
        summary.append(_describe(option, value))

    unknown_keys = set(option_selections) - {o.key for o in product.options}
    if unknown_keys:
        errors.append(f"Unknown option(s): {', '.join(sorted(unknown_keys))}.")

    surcharge = Decimal("0.00")
    salads: List[str] = []
    if product.salads_enabled:
        salads = list(salad_selections or [])
        config = product.salads

        if not all(isinstance(s, str) for s in salads):
            errors.append("Salads must be given by name.")
            salads = [s for s in salads if isinstance(s, str)]

        offered_salads = set(config.items)
        unknown_salads = [s for s in salads if offered_salads and s not in offered_salads]
        if unknown_salads:
            errors.append(f"Invalid salad(s): {', '.join(unknown_salads)}.")
        if len(set(salads)) != len(salads):
            errors.append("Each salad can only be selected once.")
        if len(salads) < config.included:
            errors.append(f"Please select at least {config.included} salads.")

        extra_count = max(0, len(salads) - config.included)
        surcharge = extra_count * Decimal(config.extra_price)

        if salads:
            summary.append(f"Salads: {', '.join(salads)}")

    parts = DISPLAY_SEPARATOR.join(summary)
    display_name = f"{product.name} ({parts})" if parts else product.name

    return ResolvedLine(
        product_id=product.id,
        name=product.name,
        final_price=_quantize(base_price + surcharge),
        display_name=display_name,
        is_valid=not errors,
        errors=errors,
        selections=chosen,
        salads=salads,
    )


def validate_line(
    product: ProductSnapshot,
    salad_selections: Optional[Sequence[str]] = None,
    option_selections: Optional[Dict[str, Selection]] = None,
) -> ResolvedLine:
    """resolve_line, raising LineValidationError instead of returning an invalid line."""
    line = resolve_line(product, salad_selections, option_selections)
    if not line.is_valid:
        raise LineValidationError(product.name, line.errors)
    return line
