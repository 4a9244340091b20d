"""
Report API Module
Route summary reports filtered by driver, start date range and status
"""

from flask import Blueprint, request, jsonify

from services.reporting_service import ReportingService
from utils.api_helpers import get_json_payload, get_query_filters

report_bp = Blueprint('reports', __name__, url_prefix='/api/v1/reports')
reporting_service = ReportingService()

@report_bp.route('/routes', methods=['GET', 'POST'])
def route_report():
    """
    Route report.
    GET reads the filter from the query string, POST from a JSON body:
    {"driver_id": 1, "start_date": "2024-01-01", "end_date": "2024-01-31", "route_status": "completed"}
    """
    report_filter = get_json_payload() if request.method == 'POST' else get_query_filters()
    summary = reporting_service.generate_route_report(report_filter)
    return jsonify({'success': True, 'report': summary.to_dict()})
