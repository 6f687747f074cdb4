import argparse
import sys

from commerce_forecast.config import config
from commerce_forecast.db import db, session_scope
from commerce_forecast.exceptions import CommerceForecastError
from commerce_forecast.logging_setup import logger, get_logger, log_exception

def init_application(database_url=None):
    """Initialize application components."""
    db.initialize(database_url)
    db.check_connection()

    log = logger.app_logger
    log.info("Commerce Forecast initialized")
    log.info(f"Using database: {database_url or config.get_db_url()}")

def format_cents(amount):
    return f"{amount / 100:,.2f}"

def add_product(args):
    from commerce_forecast.services.product_service import ProductService

    with session_scope() as session:
        product = ProductService(session).create_product(
            args.user_id,
            name=args.name,
            price=args.price,
            sku=args.sku,
            category=args.category,
            current_stock=args.stock,
            description=args.description
        )
        print(f"Created product {product.id}: {product.name}")
        return {'product_id': product.id}

def list_products(args):
    from commerce_forecast.services.product_service import ProductService

    with session_scope() as session:
        products = ProductService(session).list_products(args.user_id)
        for product in products:
            print(f"{product.id:>5}  {product.name:<30} {product.sku or '-':<12} "
                  f"price {format_cents(product.price):>10}  stock {product.current_stock}")
        return {'products': len(products)}

def import_sales(args):
    from commerce_forecast.services.sales_service import SalesService

    with session_scope() as session:
        count = SalesService(session).import_sales_file(args.file, args.product_id, args.user_id)
        print(f"Imported {count} sales into product {args.product_id}")
        return {'imported': count}

def generate_forecast(args):
    """Generate and store a demand forecast for a product.

    Args:
        args: Command-line arguments with forecast parameters
    """
    from commerce_forecast.services.forecast_service import ForecastService

    log = get_logger('forecast')
    log.info(f"Starting forecast generation with parameters: {args}")

    with session_scope() as session:
        rows = ForecastService(session).generate_forecasts(args.product_id, args.user_id, args.days)

        if args.verbose:
            for row in rows:
                print(f"{row.forecast_date}  qty {row.predicted_quantity:>6}  "
                      f"revenue {format_cents(row.predicted_revenue):>12}  "
                      f"confidence {row.confidence}%  {row.trend}  season {row.seasonality_factor}%")
        print(f"Stored {len(rows)} forecast days for product {args.product_id}")
        return {'forecast_days': len(rows)}

def analyze(args):
    from commerce_forecast.services.forecast_service import ForecastService

    with session_scope() as session:
        analysis = ForecastService(session).analyze_product(args.product_id, args.user_id)

        trend = analysis['trend']
        seasonality = analysis['seasonality']
        if trend is None:
            print(f"No sales history for product {args.product_id}")
            return {'analyzed': False}

        print(f"Trend: {trend['direction']} (strength {trend['strength']:.1f}, "
              f"growth {trend['growth_rate']:.2f}% per sale)")
        if seasonality['has_season']:
            print(f"Seasonal: peak months {seasonality['peak_months'] or '-'}, "
                  f"low months {seasonality['low_months'] or '-'}, "
                  f"factor {seasonality['seasonality_factor']}%")
        else:
            print("No seasonal pattern detected")
        return {'analyzed': True}

def manage_alerts(args):
    from commerce_forecast.services.alert_service import AlertService

    with session_scope() as session:
        service = AlertService(session)

        if args.generate is not None:
            alerts = service.generate_alerts(args.generate, args.user_id)
            print(f"Generated {len(alerts)} alerts for product {args.generate}")
        if args.mark_read is not None:
            service.mark_as_read(args.mark_read, args.user_id)
            print(f"Marked alert {args.mark_read} as read")
        if args.delete is not None:
            service.delete_alert(args.delete, args.user_id)
            print(f"Deleted alert {args.delete}")

        alerts = service.list_alerts(args.user_id, is_read=False if args.unread else None)
        for alert in alerts:
            status = ' ' if alert.is_read else '*'
            print(f"{status}{alert.id:>5}  [{alert.severity}] {alert.alert_type}: {alert.message}")
        return {'alerts': len(alerts)}

def overview(args):
    from commerce_forecast.services.dashboard_service import DashboardService

    with session_scope() as session:
        summary = DashboardService(session).get_overview(args.user_id)

        print(f"Products:           {summary['total_products']}")
        print(f"Units sold:         {summary['total_sales']}")
        print(f"Revenue:            {format_cents(summary['total_revenue'])}")
        print(f"Predicted revenue:  {format_cents(summary['predicted_revenue'])}")
        print(f"Unread alerts:      {summary['unread_alerts']}")
        return {key: value for key, value in summary.items() if not key.startswith('recent_')}

COMMANDS = {
    'add-product': add_product,
    'list-products': list_products,
    'import-sales': import_sales,
    'forecast': generate_forecast,
    'analyze': analyze,
    'alerts': manage_alerts,
    'overview': overview
}

def build_parser():
    parser = argparse.ArgumentParser(description='Commerce Forecast')

    parser.add_argument('--setup-db', action='store_true',
                      help='Set up the database schema')
    parser.add_argument('--drop-db', action='store_true',
                      help='Drop existing tables before setup')
    parser.add_argument('--database-url', type=str,
                      help='Database URL, overrides the configured one')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    product_parser = subparsers.add_parser('add-product', help='Add a product to the catalog')
    product_parser.add_argument('--name', required=True, help='Product name')
    product_parser.add_argument('--price', type=int, required=True, help='Price in cents')
    product_parser.add_argument('--sku', type=str, help='Stock keeping unit')
    product_parser.add_argument('--category', type=str, help='Product category')
    product_parser.add_argument('--stock', type=int, default=0, help='Current stock')
    product_parser.add_argument('--description', type=str, help='Product description')

    subparsers.add_parser('list-products', help='List catalog products')

    import_parser = subparsers.add_parser('import-sales', help='Import sales history from CSV or JSON')
    import_parser.add_argument('file', help='Path to a .csv or .json file')
    import_parser.add_argument('--product-id', type=int, required=True, help='Product the sales belong to')

    forecast_parser = subparsers.add_parser('forecast', help='Generate a demand forecast')
    forecast_parser.add_argument('--product-id', type=int, required=True, help='Product to forecast')
    forecast_parser.add_argument('--days', type=int,
                               default=config.forecast_config['default_days_ahead'],
                               help='Forecast horizon in days')
    forecast_parser.add_argument('--verbose', '-v', action='store_true',
                               help='Display every forecast day')

    analyze_parser = subparsers.add_parser('analyze', help='Show trend and seasonality of a product')
    analyze_parser.add_argument('--product-id', type=int, required=True, help='Product to analyze')

    alerts_parser = subparsers.add_parser('alerts', help='Generate and manage demand alerts')
    alerts_parser.add_argument('--generate', type=int, metavar='PRODUCT_ID',
                             help='Run anomaly detection for a product')
    alerts_parser.add_argument('--mark-read', type=int, metavar='ALERT_ID', help='Mark an alert as read')
    alerts_parser.add_argument('--delete', type=int, metavar='ALERT_ID', help='Delete an alert')
    alerts_parser.add_argument('--unread', action='store_true', help='Only list unread alerts')

    subparsers.add_parser('overview', help='Show dashboard figures')

    for subparser in subparsers.choices.values():
        subparser.add_argument('--user-id', type=int, default=1, help='Owner of the data')

    return parser

def main(argv=None):
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        init_application(args.database_url)

        if args.setup_db:
            if args.drop_db:
                db.drop_all_tables()
            db.create_all_tables()
            logger.app_logger.info("Database schema ready")

        if args.command is None:
            if not args.setup_db:
                parser.print_help()
            return 0

        log_info = logger.batch_start_log(args.command, {'user_id': args.user_id})
        try:
            result = COMMANDS[args.command](args)
        except CommerceForecastError:
            logger.batch_end_log(log_info, success=False)
            raise
        logger.batch_end_log(log_info, result_info=result)
        return 0

    except CommerceForecastError as e:
        log_exception('app', e, f"Command {args.command or 'setup'} failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
