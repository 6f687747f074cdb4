"""
End-to-end tests of the command line interface against a SQLite file.
"""
import contextlib
import io
import os
import tempfile
import unittest

from commerce_forecast.db import db
from commerce_forecast.main import main


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.database_url = f"sqlite:///{os.path.join(self.tmp_dir.name, 'test.db')}"
        self.run_cli('--setup-db')

    def tearDown(self):
        db.engine.dispose()
        self.tmp_dir.cleanup()

    def run_cli(self, *args):
        output = io.StringIO()
        with contextlib.redirect_stdout(output), contextlib.redirect_stderr(output):
            code = main(['--database-url', self.database_url, *args])
        return code, output.getvalue()

    def write_sales(self):
        path = os.path.join(self.tmp_dir.name, 'sales.csv')
        with open(path, 'w', encoding='utf-8') as handle:
            handle.write("date,quantity,revenue\n")
            for day in range(1, 29):
                handle.write(f"2024-02-{day:02d},15,15.00\n")
        return path

    def test_full_workflow(self):
        code, output = self.run_cli('add-product', '--name', 'Mug', '--price', '100')
        self.assertEqual(code, 0)
        self.assertIn('Created product 1: Mug', output)

        code, output = self.run_cli('import-sales', self.write_sales(), '--product-id', '1')
        self.assertEqual(code, 0)
        self.assertIn('Imported 28 sales', output)

        code, output = self.run_cli('forecast', '--product-id', '1', '--days', '14')
        self.assertEqual(code, 0)
        self.assertIn('Stored 14 forecast days', output)

        code, output = self.run_cli('alerts', '--generate', '1')
        self.assertEqual(code, 0)
        self.assertIn('Generated 1 alerts', output)
        self.assertIn('stock_alert', output)

        code, output = self.run_cli('overview')
        self.assertEqual(code, 0)
        self.assertIn('Units sold:         420', output)
        self.assertIn('Unread alerts:      1', output)

    def test_forecast_without_sales_fails(self):
        self.run_cli('add-product', '--name', 'Mug', '--price', '100')

        code, output = self.run_cli('forecast', '--product-id', '1')

        self.assertEqual(code, 1)
        self.assertIn('No sales history', output)

    def test_other_users_data_is_isolated(self):
        self.run_cli('add-product', '--name', 'Mug', '--price', '100')

        code, output = self.run_cli('analyze', '--product-id', '1', '--user-id', '2')

        self.assertEqual(code, 1)
        self.assertIn('Product 1 not found', output)


if __name__ == '__main__':
    unittest.main()
