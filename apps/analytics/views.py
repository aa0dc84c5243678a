from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import DashboardQuerySerializer, DashboardSerializer
from .services import get_dashboard


@extend_schema(parameters=[DashboardQuerySerializer], responses={200: DashboardSerializer})
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """
    Operation, money and volume totals.

    GET /api/analytics/dashboard/?organization={uuid}
    """
    query = DashboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    metrics = get_dashboard(
        user=request.user,
        organization_id=query.validated_data.get('organization'),
    )
    return Response(DashboardSerializer(metrics).data)
