import logging

from django.db import transaction

from apps.accounts.services import get_user
from apps.core.exceptions import PermissionDenied

from .models import AdminSettings, UserProfile, VendorProfile

logger = logging.getLogger(__name__)


def _apply(instance, changes: dict):
    for field, value in changes.items():
        setattr(instance, field, value)
    instance.save()
    return instance


# 첫 조회 시 기본값으로 생성 (get_or_create)
def get_user_profile(identity) -> UserProfile:
    profile, created = UserProfile.objects.select_related("user").get_or_create(user_id=identity.user_id)
    if created:
        logger.info(f"user profile created: {identity.user_id}")
    return profile


@transaction.atomic
def update_user_profile(identity, changes: dict) -> UserProfile:
    return _apply(get_user_profile(identity), changes)


def get_vendor_profile(identity) -> VendorProfile:
    profile, _ = VendorProfile.objects.get_or_create(vendor_id=identity.user_id)
    return profile


@transaction.atomic
def update_vendor_profile(identity, changes: dict) -> VendorProfile:
    return _apply(get_vendor_profile(identity), changes)


def _own_settings(identity, user_id):
    if str(user_id) != str(identity.user_id):
        raise PermissionDenied("无权访问其他管理员的设置")
    get_user(user_id)


def get_admin_settings(identity, user_id) -> AdminSettings:
    _own_settings(identity, user_id)
    settings, _ = AdminSettings.objects.get_or_create(admin_id=user_id)
    return settings


@transaction.atomic
def update_admin_settings(identity, user_id, changes: dict) -> AdminSettings:
    settings = get_admin_settings(identity, user_id)
    if "payment_gateways" in changes:
        changes = {**changes, "payment_gateways": ",".join(changes["payment_gateways"])}
    _apply(settings, changes)
    logger.info(f"admin settings updated: {user_id}")
    return settings
