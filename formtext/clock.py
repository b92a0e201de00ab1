"""
Clock - Current date and time strings for form defaults
Cadenas de fecha y hora actuales para valores por defecto
"""

import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


def current_date(now: Optional[datetime] = None) -> str:
    """
    Current date as dd.mm.yyyy
    Fecha actual como dd.mm.aaaa
    """
    now = now or datetime.now()
    return now.strftime("%d.%m.%Y")


def current_time_rounded(round_to_ten: bool = False, now: Optional[datetime] = None) -> str:
    """
    Current time as HH:MM, optionally rounded to the nearest ten minutes
    Hora actual como HH:MM, opcionalmente redondeada a la decena de minutos

    Args:
        round_to_ten: Round minutes to 0, 10, ... 50; 60 rolls over to the next hour
        now: Reference time (defaults to the local clock)

    Returns:
        Time string
    """
    now = now or datetime.now()
    hours, minutes = now.hour, now.minute

    if round_to_ten:
        # Halves round up: 45 -> 50, 55 -> next hour
        minutes = (minutes + 5) // 10 * 10
        if minutes == 60:
            minutes = 0
            hours = (hours + 1) % 24

    result = f"{hours:02d}:{minutes:02d}"
    logger.debug("Current time%s: %s", " (rounded)" if round_to_ten else "", result)
    return result
