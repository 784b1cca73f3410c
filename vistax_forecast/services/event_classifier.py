from ..models import CalendarEvent


def is_usd(ev: CalendarEvent) -> bool:
    return (ev.currency or '').upper() == 'USD'


def is_high_impact(ev: CalendarEvent) -> bool:
    imp = (ev.impact or '').lower()
    return 'high' in imp or imp == '3'


def is_fomc_title(title: str) -> bool:
    t = (title or '').lower()
    return (
        'fomc' in t
        or 'federal open market' in t
        or 'fed funds' in t
        or ('interest rate decision' in t and 'fed' in t)
    )


def is_fomc(ev: CalendarEvent) -> bool:
    return is_fomc_title(ev.title)


def is_relevant(ev: CalendarEvent) -> bool:
    """Red folder USD events, the only ones the routine filters on"""
    return is_usd(ev) and is_high_impact(ev)
