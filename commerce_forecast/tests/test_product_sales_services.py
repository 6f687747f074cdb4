"""
Tests for the product and sales services.
"""
import json
import os
import tempfile
import unittest
from datetime import datetime

from commerce_forecast.exceptions import DataImportError, NotFoundError, ValidationError
from commerce_forecast.models import SalesHistory
from commerce_forecast.services.product_service import ProductService
from commerce_forecast.services.sales_service import SalesService, parse_sale_row
from helpers import DatabaseTestCase


class TestProductService(DatabaseTestCase):
    """Test cases for ProductService."""

    def setUp(self):
        super().setUp()
        self.service = ProductService(self.session)

    def test_create_and_list_products(self):
        first = self.service.create_product(1, name='Mug', price=1299, sku='MUG-1')
        second = self.service.create_product(1, name='Kettle', price=4500, current_stock=3)
        self.service.create_product(2, name='Other user product', price=100)

        products = self.service.list_products(1)

        self.assertEqual([p.id for p in products], [second.id, first.id])
        self.assertEqual(first.current_stock, 0)
        self.assertEqual(second.current_stock, 3)

    def test_other_users_product_is_invisible(self):
        product = self.service.create_product(1, name='Mug', price=1299)

        self.assertIsNotNone(self.service.get_product(product.id, 1))
        self.assertIsNone(self.service.get_product(product.id, 2))
        self.assertIsNone(self.service.get_product(9999, 1))
        with self.assertRaises(NotFoundError):
            self.service.require_product(product.id, 2)

    def test_create_rejects_invalid_fields(self):
        with self.assertRaises(ValidationError) as context:
            self.service.create_product(1, name='', price=-5)
        self.assertEqual(set(context.exception.details), {'name', 'price'})

        with self.assertRaises(ValidationError):
            self.service.create_product(1, name='Mug', price=100, colour='blue')

    def test_update_product(self):
        product = self.service.create_product(1, name='Mug', price=1299)

        updated = self.service.update_product(product.id, 1, current_stock=40, category='Kitchen')

        self.assertEqual(updated.current_stock, 40)
        self.assertEqual(updated.category, 'Kitchen')
        self.assertEqual(updated.name, 'Mug')

        with self.assertRaises(ValidationError):
            self.service.update_product(product.id, 1, price=-1)
        with self.assertRaises(NotFoundError):
            self.service.update_product(product.id, 2, current_stock=1)

    def test_delete_product_removes_its_sales(self):
        product = self.service.create_product(1, name='Mug', price=1299)
        SalesService(self.session).create_sale(product.id, 1, 2, 2598, datetime(2024, 1, 1))

        self.service.delete_product(product.id, 1)

        self.assertIsNone(self.service.get_product(product.id, 1))
        self.assertEqual(self.session.query(SalesHistory).count(), 0)

    def test_to_engine_product(self):
        product = self.service.create_product(1, name='Mug', price=1299, current_stock=7)

        self.assertEqual(
            ProductService.to_engine_product(product),
            {'id': product.id, 'name': 'Mug', 'current_stock': 7}
        )


class TestSalesService(DatabaseTestCase):
    """Test cases for SalesService."""

    def setUp(self):
        super().setUp()
        self.product = ProductService(self.session).create_product(1, name='Mug', price=1000)
        self.service = SalesService(self.session)
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()
        super().tearDown()

    def write_file(self, name, content):
        path = os.path.join(self.tmp_dir.name, name)
        with open(path, 'w', encoding='utf-8') as handle:
            handle.write(content)
        return path

    def test_create_sale_validates(self):
        with self.assertRaises(ValidationError):
            self.service.create_sale(self.product.id, 1, 0, 100, datetime(2024, 1, 1))
        with self.assertRaises(ValidationError):
            self.service.create_sale(self.product.id, 1, 1, -100, datetime(2024, 1, 1))
        with self.assertRaises(NotFoundError):
            self.service.create_sale(self.product.id, 2, 1, 100, datetime(2024, 1, 1))

    def test_sales_are_listed_newest_first(self):
        self.service.create_sale(self.product.id, 1, 1, 1000, datetime(2024, 1, 1))
        self.service.create_sale(self.product.id, 1, 3, 3000, datetime(2024, 1, 3))
        self.service.create_sale(self.product.id, 1, 2, 2000, datetime(2024, 1, 2))

        sales = self.service.get_product_sales(self.product.id, 1)

        self.assertEqual([s.quantity for s in sales], [3, 2, 1])
        self.assertEqual(len(self.service.list_sales(1, limit=2)), 2)
        self.assertEqual(self.service.list_sales(2), [])
        self.assertEqual(
            self.service.get_sales_records(self.product.id, 1)[0],
            {'quantity': 3, 'revenue': 3000, 'sale_date': datetime(2024, 1, 3)}
        )

    def test_bulk_create_sales(self):
        sales = [
            {'product_id': self.product.id, 'quantity': q, 'revenue': q * 1000,
             'sale_date': datetime(2024, 2, q)}
            for q in range(1, 6)
        ]

        self.assertEqual(self.service.bulk_create_sales(1, sales), 5)
        self.assertEqual(len(self.service.get_product_sales(self.product.id, 1)), 5)

    def test_bulk_create_rejects_whole_batch(self):
        sales = [
            {'product_id': self.product.id, 'quantity': 1, 'revenue': 1000, 'sale_date': datetime(2024, 2, 1)},
            {'product_id': self.product.id, 'quantity': 0, 'revenue': 0, 'sale_date': datetime(2024, 2, 2)},
        ]

        with self.assertRaises(ValidationError):
            self.service.bulk_create_sales(1, sales)
        self.assertEqual(self.session.query(SalesHistory).count(), 0)

    def test_parse_csv_file(self):
        path = self.write_file('sales.csv', (
            "date, quantity, revenue\n"
            "2024-01-01, 10, 150.00\n"
            "2024-01-02, 5, 19.99\n"
            "not a date, 3, 30.00\n"
            "2024-01-04, many, 30.00\n"
            "2024-01-05, 0, 0\n"
            "\n"
        ))

        sales = self.service.parse_sales_file(path)

        self.assertEqual(sales, [
            {'quantity': 10, 'revenue': 15000, 'sale_date': datetime(2024, 1, 1)},
            {'quantity': 5, 'revenue': 1999, 'sale_date': datetime(2024, 1, 2)},
        ])

    def test_parse_json_file_with_alternative_columns(self):
        path = self.write_file('sales.json', json.dumps([
            {'Date': '2024-03-01', 'Quantity': 4, 'Price': 12.5},
            {'saleDate': '2024-03-02T09:00:00', 'quantity': '6', 'revenue': '18'},
            {'quantity': 1, 'revenue': 1},
            'not an object',
        ]))

        sales = self.service.parse_sales_file(path)

        self.assertEqual(sales, [
            {'quantity': 4, 'revenue': 1250, 'sale_date': datetime(2024, 3, 1)},
            {'quantity': 6, 'revenue': 1800, 'sale_date': datetime(2024, 3, 2, 9)},
        ])

    def test_parse_skips_non_finite_numbers(self):
        csv_path = self.write_file('sales.csv', (
            "date,quantity,revenue\n"
            "2024-01-01,inf,1.00\n"
            "2024-01-02,2,nan\n"
            "2024-01-03,2,4.00\n"
        ))
        json_path = self.write_file('sales.json', (
            '[{"date": "2024-01-01", "quantity": 1, "revenue": 1e999},'
            ' {"date": "2024-01-03", "quantity": 2, "revenue": 4}]'
        ))

        expected = [{'quantity': 2, 'revenue': 400, 'sale_date': datetime(2024, 1, 3)}]
        self.assertEqual(self.service.parse_sales_file(csv_path), expected)
        self.assertEqual(self.service.parse_sales_file(json_path), expected)

    def test_parse_rejects_unreadable_files(self):
        with self.assertRaises(DataImportError):
            self.service.parse_sales_file(self.write_file('sales.xlsx', 'x'))
        with self.assertRaises(DataImportError):
            self.service.parse_sales_file(self.write_file('sales.json', '{broken'))
        with self.assertRaises(DataImportError):
            self.service.parse_sales_file(self.write_file('sales.json', '{"date": "2024-01-01"}'))
        with self.assertRaises(DataImportError):
            self.service.parse_sales_file(os.path.join(self.tmp_dir.name, 'missing.csv'))

    def test_import_sales_file(self):
        path = self.write_file('sales.csv', "Date,Quantity,Revenue\n2024-01-01,2,20\n2024-01-02,3,30\n")

        count = self.service.import_sales_file(path, self.product.id, 1)

        self.assertEqual(count, 2)
        self.assertEqual(
            [s.revenue for s in self.service.get_product_sales(self.product.id, 1)],
            [3000, 2000]
        )

    def test_import_without_valid_rows_fails(self):
        path = self.write_file('sales.csv', "date,quantity,revenue\nbad,bad,bad\n")

        with self.assertLogs('commerce_forecast.services.sales_service', level='WARNING') as logs:
            with self.assertRaises(DataImportError):
                self.service.import_sales_file(path, self.product.id, 1)
        self.assertIn('found no valid sales', logs.output[-1])
        with self.assertRaises(NotFoundError):
            self.service.import_sales_file(path, self.product.id, 2)


class TestParseSaleRow(unittest.TestCase):

    def test_quantity_is_truncated_and_revenue_converted_to_cents(self):
        row = {'date': '2024-06-01', 'quantity': '7.9', 'revenue': '0.07'}

        self.assertEqual(
            parse_sale_row(row),
            {'quantity': 7, 'revenue': 7, 'sale_date': datetime(2024, 6, 1)}
        )

    def test_non_finite_numbers_are_rejected(self):
        for quantity, revenue in (('inf', '1'), ('2', '-inf'), ('nan', '1'), (1, 1e307)):
            with self.assertRaises(ValueError):
                parse_sale_row({'date': '2024-06-01', 'quantity': quantity, 'revenue': revenue})

    def test_missing_columns(self):
        with self.assertRaises(ValueError):
            parse_sale_row({'date': '2024-06-01', 'quantity': '1'})


if __name__ == '__main__':
    unittest.main()
