# backoffice/services.py
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q
from django.http import Http404

from apps.communications.models import Message, SupportMessage
from apps.requirements.models import Requirement
from apps.teachers.services import get_teacher_profile, update_kyc_status
from apps.users.services import serialize_profile

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_PAGE_SIZE = 50
DEFAULT_BAN_REASON = "Admin action"


def get_user_or_404(user_id):
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise Http404("User not found")
    return user


def create_admin(data):
    email = (data.get('email') or '').strip()
    password = data.get('password')
    first_name = (data.get('firstName') or '').strip()
    if not email or not password or not first_name:
        raise ValueError("Email, password, and first name are required")
    if User.objects.filter(email__iexact=email).exists():
        raise ValueError("Admin already exists")
    admin = User.objects.create_admin(
        email=email,
        password=password,
        first_name=first_name,
        last_name=data.get('lastName') or '',
    )
    logger.info("Admin account created: %s", admin.email)
    return admin


def admin_stats():
    counts = User.objects.aggregate(
        students=Count('id', filter=Q(role=User.Role.STUDENT)),
        teachers=Count('id', filter=Q(role=User.Role.TEACHER)),
        admins=Count('id', filter=Q(role=User.Role.ADMIN)),
    )
    return {
        'totalUsers': counts['students'] + counts['teachers'],
        'students': counts['students'],
        'teachers': counts['teachers'],
        'admins': counts['admins'],
        'totalMessages': Message.objects.count(),
        'supportMessages': SupportMessage.objects.count(),
        'totalRequirements': Requirement.objects.count(),
    }


def list_users(user_type=None, page=1, limit=DEFAULT_PAGE_SIZE):
    """Non-admin accounts, newest first, one page at a time."""
    page = max(page, 1)
    limit = max(limit, 1)
    queryset = (
        User.objects.exclude(role=User.Role.ADMIN)
        .select_related('student_profile', 'teacher_profile')
        .order_by('-created_at')
    )
    if user_type in (User.Role.STUDENT, User.Role.TEACHER):
        queryset = queryset.filter(role=user_type)
    offset = (page - 1) * limit
    return list(queryset[offset:offset + limit])


def user_with_profile(user, base):
    data = dict(base)
    data['isOnline'] = user.recently_online
    data['profile'] = serialize_profile(user)
    return data


def teachers_detailed():
    teachers = (
        User.objects.filter(role=User.Role.TEACHER)
        .select_related('teacher_profile')
        .order_by('-created_at')
    )
    rows = []
    for user in teachers:
        profile = user.get_profile()
        rows.append({
            'id': str(user.id),
            'firstName': user.first_name,
            'lastName': user.last_name,
            'email': user.email,
            'mobile': user.mobile,
            'profileImage': user.profile_image_url,
            'isLocationVerified': user.is_location_verified,
            'city': user.city,
            'state': user.state,
            'fullAddress': user.full_address,
            'isOnline': user.is_online,
            'lastSeen': user.last_seen,
            'createdAt': user.created_at,
            'subjects': profile.subjects if profile else [],
            'bio': profile.bio if profile else '',
            'qualification': profile.qualification if profile else '',
            'experience': profile.experience if profile else '',
            'monthlyFee': str(profile.monthly_fee) if profile else None,
            'rating': str(profile.rating) if profile else None,
            'studentCount': profile.student_count if profile else 0,
            'isVerified': profile.is_verified if profile else False,
            'kycStatus': profile.kyc_status if profile else None,
        })
    return rows


def _participant(user):
    return {'id': str(user.id), 'name': user.get_full_name(), 'profileImage': user.profile_image_url}


def all_conversations():
    """Every message on the platform, newest first, for monitoring."""
    messages = Message.objects.select_related('from_user', 'to_user').order_by('-created_at')
    return [
        {
            'id': str(message.id),
            'content': message.content,
            'attachment': message.attachment,
            'attachmentType': message.attachment_type,
            'isRead': message.is_read,
            'createdAt': message.created_at,
            'fromUser': _participant(message.from_user),
            'toUser': _participant(message.to_user),
        }
        for message in messages
    ]


def ban_user(user_id, reason=None):
    user = get_user_or_404(user_id)
    user.ban(reason or DEFAULT_BAN_REASON)
    logger.warning("User %s banned: %s", user.email, user.ban_reason)
    return user


def unban_user(user_id):
    user = get_user_or_404(user_id)
    user.unban()
    logger.info("User %s unbanned", user.email)
    return user


def change_password(admin, current_password, new_password):
    if not current_password or not new_password:
        raise ValueError("Current password and new password are required")
    if not admin.check_password(current_password):
        raise ValueError("Current password is incorrect")
    admin.set_password(new_password)
    admin.save(update_fields=['password'])
    logger.info("Admin %s changed password", admin.email)


@transaction.atomic
def delete_user_completely(user_id):
    """
    Remove a student or teacher with everything attached to the account.
    Returns (success, message).
    """
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        return False, "User not found"
    if user.is_admin:
        return False, "Cannot delete admin users"

    label = f"{user.role} account: {user.first_name} {user.last_name}".strip()
    if user.profile_image:
        user.profile_image.delete(save=False)
    # profiles, requirements, messages, reviews, requests and support threads cascade
    user.delete()
    logger.warning("Deleted %s (%s)", label, user_id)
    return True, f"Successfully deleted {label}"


def reply_support_message(message_id, reply):
    reply = (reply or '').strip()
    if not reply:
        raise ValueError("Admin reply is required")
    support_message = SupportMessage.objects.filter(pk=message_id).first()
    if support_message is None:
        raise Http404("Support message not found")
    return support_message.reply(reply)


def support_conversations():
    """Latest support message per user, newest thread first."""
    messages = SupportMessage.objects.select_related('user').order_by('-created_at')
    counts = dict(
        SupportMessage.objects.order_by().values('user_id').annotate(total=Count('id')).values_list('user_id', 'total')
    )
    conversations = {}
    for message in messages:
        if message.user_id in conversations:
            continue
        user = message.user
        conversations[message.user_id] = {
            'userId': str(message.user_id),
            'userName': user.get_full_name(),
            'userEmail': user.email,
            'userImage': user.profile_image_url,
            'userType': user.role,
            'lastMessage': message.message,
            'lastMessageTime': message.created_at,
            'status': message.status,
            'hasReply': bool(message.admin_reply),
            'messageCount': counts.get(message.user_id, 0),
        }
    return list(conversations.values())


def support_thread(user_id):
    return SupportMessage.objects.filter(user_id=user_id).order_by('created_at')


def reply_to_latest_support_message(user_id, reply):
    reply = (reply or '').strip()
    if not reply:
        raise ValueError("Reply message is required")
    latest = SupportMessage.objects.filter(user_id=user_id).order_by('-created_at').first()
    if latest is None:
        return None
    return latest.reply(reply)


def review_teacher_kyc(user_id, status):
    teacher = get_teacher_profile(get_user_or_404(user_id))
    return update_kyc_status(teacher, status)


EXPORT_COLUMNS = (
    ('id', 'ID'),
    ('firstName', 'First Name'),
    ('lastName', 'Last Name'),
    ('email', 'Email'),
    ('mobile', 'Mobile'),
    ('userType', 'User Type'),
    ('city', 'City'),
    ('state', 'State'),
    ('pinCode', 'Pin Code'),
    ('isLocationVerified', 'Location Verified'),
    ('isBanned', 'Banned'),
    ('createdAt', 'Joined'),
)


def export_rows(user_type=None):
    queryset = User.objects.exclude(role=User.Role.ADMIN).order_by('-created_at')
    if user_type in (User.Role.STUDENT, User.Role.TEACHER):
        queryset = queryset.filter(role=user_type)
    return [
        {
            'id': str(user.id),
            'firstName': user.first_name,
            'lastName': user.last_name,
            'email': user.email,
            'mobile': user.mobile,
            'userType': user.role,
            'city': user.city,
            'state': user.state,
            'pinCode': user.pin_code,
            'isLocationVerified': 'Yes' if user.is_location_verified else 'No',
            'isBanned': 'Yes' if user.is_banned else 'No',
            'createdAt': user.created_at,
        }
        for user in queryset
    ]
