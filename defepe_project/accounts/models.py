from django.conf import settings
from django.db import models, transaction


class AdminProfile(models.Model):
    """
    Pharmacy staff profile attached to a Django user.
    Only admins and super admins use this backend.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        SUPER_ADMIN = "super_admin", "Super Admin"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="admin_profile",
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.ADMIN,
        db_index=True,
    )

    phone_number = models.CharField(max_length=20, blank=True)

    # Revoked accounts keep their data but cannot sign in
    access_revoked = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["role", "user__username"]

    def __str__(self):
        full = self.user.get_full_name()
        name = f"{full} ({self.user.username})" if full else self.user.username
        return f"{name} [{self.get_role_display()}]"

    @property
    def is_super_admin(self):
        return self.role == self.Role.SUPER_ADMIN and not self.access_revoked

    @transaction.atomic
    def set_access_revoked(self, revoked):
        """
        Revoke or restore access. The user's is_active flag
        follows, so Django's own login refuses revoked accounts.
        """
        self.access_revoked = revoked
        self.save(update_fields=["access_revoked", "updated_at"])

        self.user.is_active = not revoked
        self.user.save(update_fields=["is_active"])

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.user.username,
            "full_name": self.user.get_full_name(),
            "email": self.user.email,
            "phone_number": self.phone_number,
            "role": self.role,
            "access_revoked": self.access_revoked,
            "created_at": self.created_at.isoformat(),
        }


def is_super_admin(user):
    profile = getattr(user, "admin_profile", None)
    return bool(profile and profile.is_super_admin)


def super_admins():
    """Active users holding the super admin role."""
    from django.contrib.auth import get_user_model

    User = get_user_model()
    return User.objects.filter(
        is_active=True,
        admin_profile__role=AdminProfile.Role.SUPER_ADMIN,
        admin_profile__access_revoked=False,
    )
