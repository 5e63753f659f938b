import uuid

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class Role(models.TextChoices):
    CUSTOMER = "customer", "Customer"
    VENDOR = "vendor", "Vendor"
    ADMIN = "admin", "Admin"

    @classmethod
    def parse(cls, value) -> "Role":
        """대소문자 무시. 알 수 없는 값은 Customer로 대체하지 않고 ValueError"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}")


class UserManager(BaseUserManager):
    def create_user(self, email, password=None, role=Role.CUSTOMER, **extra):
        if not email:
            raise ValueError("email is required")
        user = self.model(email=self.normalize_email(email), role=Role.parse(role), **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, unique=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.CUSTOMER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"

    class Meta:
        db_table = "users"

    def __str__(self):
        return self.email

    @property
    def role_enum(self) -> Role:
        return Role.parse(self.role)
