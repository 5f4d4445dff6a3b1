from django.http import HttpResponse
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from users.permissions import IsAdminMember

from .serializers import ReportParameterSerializer
from .services import SalesReportService


class ReportViewSet(viewsets.ViewSet):
    """Admin sales reports over pickup dates"""

    permission_classes = [IsAdminMember]

    def _report_data(self, request):
        serializer = ReportParameterSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data
        return SalesReportService.generate_sales_report(
            start_date=params["start_date"],
            end_date=params["end_date"],
            use_cache=params["use_cache"],
        )

    @action(detail=False, methods=["get"], url_path="sales")
    def sales(self, request):
        return Response(self._report_data(request))

    @action(detail=False, methods=["get"], url_path="sales/export")
    def export_sales(self, request):
        report_data = self._report_data(request)
        content = SalesReportService.export_sales_to_csv(report_data)

        date_range = report_data["date_range"]
        filename = f"sales_{date_range['start']}_{date_range['end']}.csv"
        response = HttpResponse(content, content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
