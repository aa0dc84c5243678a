from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    OrganizationSerializer,
    OrganizationListSerializer,
    OrganizationCreateSerializer,
    OrganizationMemberSerializer,
    AddMemberSerializer,
    UpdateMemberRoleSerializer,
)
from .services import (
    create_organization,
    list_organizations,
    get_organization,
    update_organization,
    add_member,
    update_member_role,
    remove_member,
    get_organization_members,
)


class OrganizationViewSet(
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for organizations and their members.

    All business logic is handled by services; views are thin HTTP
    handlers and domain errors are rendered by the API exception handler.

    list: Organizations the user belongs to
    create: Create an organization (creator becomes ADMIN)
    retrieve: Organization with members (members only)
    partial_update: Rename / describe (ADMIN only)
    """

    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return list_organizations(user=self.request.user)

    def get_serializer_class(self):
        if self.action == 'list':
            return OrganizationListSerializer
        if self.action in ('create', 'partial_update'):
            return OrganizationCreateSerializer
        return OrganizationSerializer

    @extend_schema(responses={201: OrganizationSerializer})
    def create(self, request, *args, **kwargs):
        serializer = OrganizationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        organization = create_organization(
            name=serializer.validated_data['name'],
            description=serializer.validated_data.get('description', ''),
            creator=request.user,
        )
        organization = get_organization(organization_id=organization.id, user=request.user)

        return Response(
            OrganizationSerializer(organization, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(responses={200: OrganizationSerializer})
    def retrieve(self, request, pk=None):
        organization = get_organization(organization_id=pk, user=request.user)
        return Response(OrganizationSerializer(organization, context={'request': request}).data)

    @extend_schema(responses={200: OrganizationSerializer})
    def partial_update(self, request, pk=None):
        serializer = OrganizationCreateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        update_organization(organization_id=pk, user=request.user, **serializer.validated_data)
        organization = get_organization(organization_id=pk, user=request.user)
        return Response(OrganizationSerializer(organization, context={'request': request}).data)

    @extend_schema(
        methods=['GET'],
        responses={200: OrganizationMemberSerializer(many=True)},
        description="List members of the organization.",
    )
    @extend_schema(
        methods=['POST'],
        request=AddMemberSerializer,
        responses={201: OrganizationMemberSerializer},
        description="Add an existing user by email (ADMIN only).",
    )
    @action(detail=True, methods=['get', 'post'])
    def members(self, request, pk=None):
        if request.method == 'GET':
            memberships = get_organization_members(organization_id=pk, user=request.user)
            return Response(OrganizationMemberSerializer(memberships, many=True).data)

        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = add_member(
            organization_id=pk,
            actor=request.user,
            email=serializer.validated_data['email'],
            role=serializer.validated_data['role'],
        )
        return Response(
            {
                'message': 'Member added successfully',
                'member': OrganizationMemberSerializer(membership).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        methods=['PATCH'],
        request=UpdateMemberRoleSerializer,
        responses={200: OrganizationMemberSerializer},
        description="Change a member's role (ADMIN only).",
    )
    @extend_schema(
        methods=['DELETE'],
        responses={204: None},
        description="Remove a member (ADMIN only).",
    )
    @action(
        detail=True,
        methods=['patch', 'delete'],
        url_path=r'members/(?P<user_id>[0-9a-f-]+)',
        url_name='member-detail',
    )
    def member_detail(self, request, pk=None, user_id=None):
        if request.method == 'DELETE':
            remove_member(organization_id=pk, user_id=user_id, actor=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = update_member_role(
            organization_id=pk,
            user_id=user_id,
            new_role=serializer.validated_data['role'],
            actor=request.user,
        )
        return Response(OrganizationMemberSerializer(membership).data)
