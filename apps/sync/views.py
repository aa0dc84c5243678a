from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    PushRequestSerializer,
    PushResponseSerializer,
    PullQuerySerializer,
    PullDataSerializer,
    PullResponseSerializer,
    SyncStatusSerializer,
)
from .services import push, pull, get_sync_status

DEVICE_HEADER = OpenApiParameter(
    'X-Device-Id',
    str,
    location=OpenApiParameter.HEADER,
    required=False,
    description='Client device identifier stored in the sync log',
)


def _device_id(request):
    return request.headers.get('X-Device-Id', '')[:100]


@extend_schema(
    request=PushRequestSerializer,
    responses={200: PushResponseSerializer},
    parameters=[DEVICE_HEADER],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def sync_push(request):
    """
    Push local changes to the server.

    POST /api/sync/push/
    Body: {"providers": [...], "operations": [...], "money_movements": [...], ...}
    """
    serializer = PushRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    results = push(
        user=request.user,
        batch=serializer.validated_data,
        device_id=_device_id(request),
    )

    return Response({
        'message': 'Sync completed',
        'results': results,
    }, status=status.HTTP_200_OK)


@extend_schema(
    parameters=[PullQuerySerializer, DEVICE_HEADER],
    responses={200: PullResponseSerializer},
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sync_pull(request):
    """
    Pull server changes since the last successful sync.

    GET /api/sync/pull/?since=2025-01-27T10:00:00Z
    """
    query = PullQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    result = pull(
        user=request.user,
        since=query.validated_data.get('since'),
        device_id=_device_id(request),
    )

    return Response({
        'data': PullDataSerializer(result.data(), context={'request': request}).data,
        'sync_timestamp': result.sync_timestamp,
    })


@extend_schema(responses={200: SyncStatusSerializer})
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sync_status(request):
    """
    Recent sync history and the last successful sync.

    GET /api/sync/status/
    """
    return Response(SyncStatusSerializer(get_sync_status(user=request.user)).data)
