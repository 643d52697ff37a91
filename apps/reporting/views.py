"""
REST views for sales reports.
"""

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from apps.core.permissions import HasRoleLevel

from .services import CURRENT_MONTH, SalesReportService


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated, HasRoleLevel])
def orders_report(request):
    """
    Sales totals and per-day series for a period.

    Query parameters:
    - period: current_month (default), last_7_days, last_30_days or last_90_days
    """
    period = request.query_params.get("period") or CURRENT_MONTH
    report = SalesReportService().get_orders_report(request.user.pk, period)
    return Response(report, status=status.HTTP_200_OK)
