"""
Configuration validation for Fleet Manager
Checks the environment variables read by create_app before deployment
"""
import os
import logging
from typing import Dict, List, Tuple, Any
import pytz

logger = logging.getLogger(__name__)

SUPPORTED_DATABASE_SCHEMES = ('sqlite', 'postgres', 'postgresql', 'postgresql+psycopg2')

def validate_database_config() -> Tuple[bool, List[str]]:
    """
    Validate the database configuration.

    Returns:
        tuple: (is_valid: bool, issues: List[str])
    """
    issues = []

    database_url = os.getenv('DATABASE_URL', '').strip()
    if not database_url:
        issues.append("DATABASE_URL not set - falling back to local SQLite database")
        return False, issues

    scheme = database_url.split('://', 1)[0] if '://' in database_url else ''
    if scheme not in SUPPORTED_DATABASE_SCHEMES:
        issues.append(f"Unsupported DATABASE_URL scheme '{scheme}'")
    elif scheme == 'sqlite':
        issues.append("DATABASE_URL points at SQLite - use PostgreSQL in production")

    return len(issues) == 0, issues

def validate_flask_config() -> Tuple[bool, List[str]]:
    """
    Validate Flask configuration for production.

    Returns:
        tuple: (is_valid: bool, issues: List[str])
    """
    issues = []

    # Check DEBUG mode in production
    debug_mode = os.getenv('DEBUG', 'False').lower()
    if debug_mode in ('true', '1', 'yes'):
        issues.append("DEBUG mode is enabled - should be disabled in production")

    if not os.getenv('ALLOWED_ORIGINS', '').strip():
        issues.append("ALLOWED_ORIGINS not set - CORS limited to localhost origins")

    timezone_name = os.getenv('APP_TIMEZONE', 'UTC')
    if timezone_name not in pytz.all_timezones_set:
        issues.append(f"APP_TIMEZONE '{timezone_name}' is not a known timezone")

    return len(issues) == 0, issues

def check_production_readiness() -> Dict[str, Any]:
    """
    Comprehensive check of production readiness.

    Returns:
        dict: Status information including issues and recommendations
    """
    database_valid, database_issues = validate_database_config()
    flask_valid, flask_issues = validate_flask_config()

    all_issues = database_issues + flask_issues
    is_production_ready = database_valid and flask_valid

    result = {
        'production_ready': is_production_ready,
        'database_configured': database_valid,
        'issues': all_issues,
        'recommendations': []
    }

    if not database_valid:
        result['recommendations'].append("Point DATABASE_URL at a PostgreSQL database")

    if not is_production_ready:
        result['recommendations'].append("Address configuration issues before deploying to production")

    if is_production_ready:
        logger.info("CONFIG: Production readiness check PASSED")
    else:
        logger.warning(f"CONFIG: Production readiness check FAILED - Issues: {len(all_issues)}")
        for issue in all_issues:
            logger.warning(f"CONFIG: Issue - {issue}")

    return result
