from rest_framework import serializers
from .models import Organization, OrganizationMember, OrganizationRole
from apps.accounts.serializers import UserPublicSerializer


class OrganizationMemberSerializer(serializers.ModelSerializer):
    """Serializer for organization memberships."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = OrganizationMember
        fields = ['id', 'user', 'organization', 'role', 'joined_at']
        read_only_fields = fields


class OrganizationSerializer(serializers.ModelSerializer):
    """Main serializer for organizations, members included."""

    created_by = UserPublicSerializer(read_only=True)
    members = OrganizationMemberSerializer(many=True, read_only=True)
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Organization
        fields = [
            'id',
            'name',
            'description',
            'created_by',
            'members',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'members', 'created_at', 'updated_at']

    def get_user_role(self, obj):
        """Get current user's role in the organization."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            for membership in obj.members.all():
                if membership.user_id == request.user.id:
                    return membership.role
        return None


class OrganizationListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    member_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Organization
        fields = ['id', 'name', 'description', 'member_count', 'created_at']
        read_only_fields = fields


class OrganizationCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and renaming organizations."""

    class Meta:
        model = Organization
        fields = ['name', 'description']


class AddMemberSerializer(serializers.Serializer):
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=OrganizationRole.choices, default=OrganizationRole.OPERATOR)


class UpdateMemberRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=OrganizationRole.choices)
