# Keep teacher ratings in step with the reviews they receive
from django.db.models import Avg
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.teachers.models import TeacherProfile

from .models import Review


def recompute_teacher_rating(user):
    """Set the teacher profile rating to the average of received ratings."""
    profile = TeacherProfile.objects.filter(user=user).first()
    if profile is None:
        return None
    average = Review.objects.filter(to_user=user).aggregate(avg=Avg('rating'))['avg']
    profile.rating = round(average, 2) if average is not None else 3.00
    profile.save(update_fields=['rating', 'updated_at'])
    return profile.rating


@receiver(post_save, sender=Review)
def update_rating_on_review(sender, instance, created, **kwargs):
    if created:
        recompute_teacher_rating(instance.to_user)


@receiver(post_delete, sender=Review)
def update_rating_on_review_delete(sender, instance, **kwargs):
    recompute_teacher_rating(instance.to_user)
