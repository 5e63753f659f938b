from rest_framework import serializers

from .models import Role, User
from .services import MIN_PASSWORD_LENGTH


class CredentialsIn(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class RegisterIn(CredentialsIn):
    password = serializers.CharField(min_length=MIN_PASSWORD_LENGTH, trim_whitespace=False)


class ChangePasswordIn(serializers.Serializer):
    old_password = serializers.CharField(trim_whitespace=False)
    new_password = serializers.CharField(trim_whitespace=False)


class RoleField(serializers.ChoiceField):
    """대소문자 무시 (Vendor, ADMIN 등)"""

    def __init__(self, **kwargs):
        super().__init__(choices=Role.choices, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.strip().lower()
        return Role(super().to_internal_value(data))


class AdminCreateUserIn(CredentialsIn):
    role = RoleField()


class AdminUpdateUserIn(serializers.Serializer):
    role = RoleField(required=False)
    password = serializers.CharField(required=False, trim_whitespace=False)


class UserOut(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "role"]


class AdminUserOut(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "role", "created_at", "updated_at"]
