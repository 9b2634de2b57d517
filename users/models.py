from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from audit.services import log_audit

class Profile(models.Model):
    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("manager", "Manager"),
        ("viewer", "Viewer"),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE)
    full_name = models.CharField(max_length=255, blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="viewer")
    avatar_url = models.URLField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.username} - {self.role}"


# SIGNALS: auto-create Profile for new users
@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    if created:
        Profile.objects.create(
            user=instance,
            full_name=instance.get_full_name() or None,
        )

@receiver(post_save, sender=User)
def save_user_profile(sender, instance, **kwargs):
    # ensures the profile is saved whenever the user is saved
    if hasattr(instance, 'profile'):
        instance.profile.save()


# SIGNALS: audit role changes
@receiver(pre_save, sender=Profile)
def remember_previous_role(sender, instance, **kwargs):
    instance._previous_role = None
    if instance.pk:
        instance._previous_role = (
            Profile.objects.filter(pk=instance.pk).values_list('role', flat=True).first()
        )

@receiver(post_save, sender=Profile)
def audit_role_change(sender, instance, created, **kwargs):
    previous = getattr(instance, '_previous_role', None)
    if created or previous is None or previous == instance.role:
        return
    log_audit(
        user=None,
        action='update',
        entity_type='profile',
        entity_id=instance.pk,
        old_values={'role': previous},
        new_values={'role': instance.role},
    )
