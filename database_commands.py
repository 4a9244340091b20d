#!/usr/bin/env python3
"""
Database Management Commands for Fleet Manager

Usage:
    python database_commands.py --help
    python database_commands.py init
    python database_commands.py status
    python database_commands.py validate
    python database_commands.py drop --yes
"""

import sys
import argparse
import logging
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app import create_app, db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def cmd_init(app, args):
    """Create all tables that do not exist yet."""
    with app.app_context():
        db.create_all()
        logger.info("Database tables created")
    return 0

def cmd_status(app, args):
    """Display connection status and per-table row counts."""
    from models import User, Driver, Route

    with app.app_context():
        print("=" * 60)
        print("DATABASE STATUS REPORT")
        print("=" * 60)

        try:
            db.session.execute(text('SELECT 1'))
        except SQLAlchemyError as e:
            print(f"Connection Status: FAILED ({e.__class__.__name__})")
            return 1

        print("Connection Status: HEALTHY")
        print(f"Engine: {db.engine.url.get_backend_name()}")
        print()
        print("Table Statistics:")
        for model in (User, Driver, Route):
            try:
                count = model.query.count()
            except SQLAlchemyError:
                db.session.rollback()
                count = 'missing (run init)'
            print(f"  {model.__tablename__}: {count}")
    return 0

def cmd_validate(app, args):
    """Run the configuration readiness checks."""
    from utils.config_validator import check_production_readiness

    status = check_production_readiness()
    print(f"Production ready: {'YES' if status['production_ready'] else 'NO'}")
    for issue in status['issues']:
        print(f"  - {issue}")
    for recommendation in status['recommendations']:
        print(f"  * {recommendation}")
    return 0 if status['production_ready'] else 1

def cmd_drop(app, args):
    """Drop all tables. Requires --yes."""
    if not args.yes:
        print("Refusing to drop tables without --yes")
        return 1
    with app.app_context():
        db.drop_all()
        logger.warning("All database tables dropped")
    return 0

COMMANDS = {
    'init': cmd_init,
    'status': cmd_status,
    'validate': cmd_validate,
    'drop': cmd_drop,
}

def build_parser():
    parser = argparse.ArgumentParser(description="Fleet Manager database management")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init', help='Create database tables')
    subparsers.add_parser('status', help='Show database status')
    subparsers.add_parser('validate', help='Check configuration readiness')
    drop_parser = subparsers.add_parser('drop', help='Drop all tables')
    drop_parser.add_argument('--yes', action='store_true', help='Confirm dropping all tables')

    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    app = create_app()
    return COMMANDS[args.command](app, args)

if __name__ == '__main__':
    sys.exit(main())
