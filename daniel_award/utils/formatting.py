from decimal import Decimal, InvalidOperation


# module daniel_award.utils.formatting
def money(amount) -> str:
    """
    Montant avec séparateurs de milliers (ex: 15000 -> "15,000").
    Les centimes sont conservés quand ils existent (ex: 250.5 -> "250.50").
    """
    try:
        value = Decimal(str(amount).strip())
    except (TypeError, ValueError, InvalidOperation):
        return "0"
    if not value.is_finite():
        return "0"
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_money(amount) -> str:
    """Montant affiché à l'acheteur (ex: 15000 -> "$15,000")."""
    return f"${money(amount)}"
