import logging

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from apps.core.exceptions import NotFound, PermissionDenied, Unauthenticated, ValidationFailed

from .models import Role, User
from .tokens import issue_token

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _check_password_length(password: str):
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"密码至少需要{MIN_PASSWORD_LENGTH}个字符")


@transaction.atomic
def register(*, email: str, password: str, role=Role.CUSTOMER) -> tuple[User, str]:
    _check_password_length(password)
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationFailed("该邮箱已被注册")
    try:
        user = User.objects.create_user(email, password, role=role)
    except IntegrityError as e:
        # 동시 가입 경합: unique 제약이 최종 방어선
        raise ValidationFailed("该邮箱已被注册") from e
    logger.info(f"user registered: {user.id} role={user.role}")
    return user, issue_token(user)


def login(*, email: str, password: str) -> tuple[User, str]:
    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.check_password(password):
        logger.info(f"login failed for {email}")
        raise Unauthenticated("电子邮件或密码无效")
    return user, issue_token(user)


def get_user(user_id) -> User:
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound("用户不存在")


def change_password(identity, *, old_password: str, new_password: str) -> None:
    user = get_user(identity.user_id)
    if not user.check_password(old_password):
        raise ValidationFailed("旧密码不正确")
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"新密码长度不能少于{MIN_PASSWORD_LENGTH}个字符")
    user.set_password(new_password)
    user.save(update_fields=["password", "updated_at"])
    logger.info(f"password changed: {user.id}")


# ---------------------------
# 관리자 전용: 사용자 관리
# ---------------------------
def list_users():
    return User.objects.order_by("-created_at")


def create_user(*, email: str, password: str, role) -> User:
    user, _ = register(email=email, password=password, role=role)
    return user


def update_user(user_id, *, role=None, password=None) -> User:
    user = get_user(user_id)
    fields = ["updated_at"]
    if role is not None:
        user.role = Role.parse(role)
        fields.append("role")
    if password:
        _check_password_length(password)
        user.set_password(password)
        fields.append("password")
    user.save(update_fields=fields)
    return user


def delete_user(identity, user_id) -> None:
    user = get_user(user_id)
    if str(user.pk) == str(identity.user_id):
        raise PermissionDenied("不能删除当前登录的管理员账户")
    try:
        user.delete()
    except ProtectedError as e:
        raise ValidationFailed("该用户存在订单记录，无法删除") from e
    logger.info(f"user deleted: {user_id} by {identity.user_id}")
