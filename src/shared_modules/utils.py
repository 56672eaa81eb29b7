from datetime import date, datetime
from typing import Optional


def parse_date_str(s: str, fmt: str) -> Optional[date]:
    """
    Liest ein Datum im angegebenen strptime-Format, None bei ungültiger Eingabe.
    """
    try:
        return datetime.strptime(s.strip(), fmt).date()
    except ValueError:
        return None


def completed_years(start: date, end: date) -> int:
    """
    Anzahl vollendeter Kalenderjahre zwischen start und end (nicht 365-Tage-Jahre).
    """
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
