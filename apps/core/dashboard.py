# core/dashboard.py
from django.contrib.auth import get_user_model
from django.db.models import Q

from apps.communications.models import Message
from apps.connections.models import UserRequest
from apps.reviews.models import Review
from apps.users.services import user_card

User = get_user_model()

DEFAULT_SUCCESS_RATE = 85
RECOMMENDATION_LIMIT = 10
RECENT_ACTIVITY_LIMIT = 20


def dashboard_stats(user):
    requests = UserRequest.objects.filter(Q(sender=user) | Q(receiver=user))
    accepted = requests.filter(status=UserRequest.STATUS_ACCEPTED).count()
    decided = requests.exclude(status=UserRequest.STATUS_PENDING).count()
    return {
        'totalConnections': accepted,
        'totalMessages': Message.objects.filter(Q(from_user=user) | Q(to_user=user)).count(),
        'totalReviews': Review.objects.filter(to_user=user).count(),
        'successRate': round(accepted * 100 / decided) if decided else DEFAULT_SUCCESS_RATE,
    }


def recommendations(user, user_type):
    """Up to ten users of `user_type`, location-verified first."""
    if user_type not in (User.Role.STUDENT, User.Role.TEACHER):
        raise ValueError("Invalid user type")
    queryset = (
        User.objects.filter(role=user_type, is_banned=False)
        .exclude(pk=user.pk)
        .select_related('teacher_profile', 'student_profile')
    )
    if user_type == User.Role.TEACHER:
        queryset = queryset.order_by('-is_location_verified', '-teacher_profile__rating', '-created_at')
    else:
        queryset = queryset.order_by('-is_location_verified', '-created_at')
    return [user_card(candidate) for candidate in queryset[:RECOMMENDATION_LIMIT]]


def recent_activity(user):
    """Latest messages, connection requests and reviews touching `user`."""
    activity = []
    messages = (
        Message.objects.filter(Q(from_user=user) | Q(to_user=user))
        .select_related('from_user', 'to_user')
        .order_by('-created_at')[:RECENT_ACTIVITY_LIMIT]
    )
    for message in messages:
        if message.from_user_id == user.pk:
            description = f"You sent a message to {message.to_user.get_full_name()}"
        else:
            description = f"{message.from_user.get_full_name()} sent you a message"
        activity.append({'type': 'message', 'id': str(message.pk), 'description': description,
                         'createdAt': message.created_at})

    requests = (
        UserRequest.objects.filter(Q(sender=user) | Q(receiver=user))
        .select_related('sender', 'receiver')
        .order_by('-created_at')[:RECENT_ACTIVITY_LIMIT]
    )
    for request in requests:
        if request.sender_id == user.pk:
            description = f"You sent a request to {request.receiver.get_full_name()} ({request.status})"
        else:
            description = f"{request.sender.get_full_name()} sent you a request ({request.status})"
        activity.append({'type': 'request', 'id': str(request.pk), 'description': description,
                         'createdAt': request.created_at})

    reviews = Review.objects.filter(to_user=user).select_related('from_user').order_by('-created_at')
    for review in reviews[:RECENT_ACTIVITY_LIMIT]:
        activity.append({
            'type': 'review',
            'id': str(review.pk),
            'description': f"{review.from_user.get_full_name()} rated you {review.rating}/5",
            'createdAt': review.created_at,
        })

    activity.sort(key=lambda item: item['createdAt'], reverse=True)
    return activity[:RECENT_ACTIVITY_LIMIT]
