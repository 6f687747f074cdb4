"""Builders for sales records and databases shared by the tests."""
import unittest
from datetime import datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from commerce_forecast.models import Base


def daily_records(quantities, start=datetime(2024, 1, 1), revenue_per_unit=100):
    """One record per consecutive day."""
    return [
        {
            'quantity': quantity,
            'revenue': quantity * revenue_per_unit,
            'sale_date': start + timedelta(days=offset)
        }
        for offset, quantity in enumerate(quantities)
    ]


def seasonal_records(year=2023):
    """Two sales per month on the 1st and 15th: December 30 units, July 5, other months 10."""
    records = []
    for month in range(1, 13):
        quantity = {12: 30, 7: 5}.get(month, 10)
        for day in (1, 15):
            records.append({
                'quantity': quantity,
                'revenue': quantity * 100,
                'sale_date': datetime(year, month, day)
            })
    return records


class DatabaseTestCase(unittest.TestCase):
    """Runs each test against a fresh in-memory SQLite database."""

    def setUp(self):
        self.engine = create_engine('sqlite://')
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine)()

    def tearDown(self):
        self.session.close()
        self.engine.dispose()
