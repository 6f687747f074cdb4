# commerce_forecast/utils/date_utils.py
from datetime import date, datetime, time, timedelta
from typing import List, Mapping, Sequence, Union

# Fallback formats tried after ISO 8601, day-first before month-first
DATE_FORMATS = (
    "%d/%m/%Y",
    "%m/%d/%Y",
)

def add_days(start_date: date, days: int) -> date:
    """Add days to a date.
    
    Args:
        start_date: Start date
        days: Number of days to add
        
    Returns:
        New date
    """
    return start_date + timedelta(days=days)

def convert_to_date(value: Union[date, datetime]) -> date:
    """Drop the time part of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value

def parse_date(value: str) -> datetime:
    """Parse a sale date from an import file.
    
    ISO 8601 strings (with or without time and offset) are accepted first,
    then the day-first and month-first slash formats.
    
    Raises:
        ValueError if no format matches
    """
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    
    try:
        parsed = datetime.fromisoformat(text)
        return parsed.replace(tzinfo=None)
    except ValueError:
        pass
    
    for format_string in DATE_FORMATS:
        try:
            return datetime.strptime(text, format_string)
        except ValueError:
            continue
    
    raise ValueError(f"Unrecognised date: {value}")

def _sort_key(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)

def sort_by_date(records: Sequence[Mapping], field: str = 'sale_date') -> List[Mapping]:
    """Return records in ascending date order.
    
    The sort is stable, so records sharing a date keep their relative order.
    Plain dates sort as midnight of that day.
    """
    return sorted(records, key=lambda record: _sort_key(record[field]))
