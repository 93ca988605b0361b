from sqladmin import ModelView

from app.booking.models import Booking
from app.media.models import MediaUpload
from app.talent.models import TalentApplication
from app.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    column_list = [
        User.email,
        User.name,
        User.role,
        User.mobile,
        User.email_verified,
        User.id,
        User.created_at,
        User.updated_at,
    ]
    column_searchable_list = [User.email, User.name]
    column_sortable_list = [User.email, User.name, User.role, User.created_at]

    # Credentials never leave the database through the admin UI.
    column_details_exclude_list = [
        User.password_hash,
        User.reset_token,
        User.reset_token_expiry,
    ]
    form_excluded_columns = [
        User.password_hash,
        User.reset_token,
        User.reset_token_expiry,
        User.applications,
        User.created_at,
        User.updated_at,
    ]


class TalentApplicationAdmin(ModelView, model=TalentApplication):
    name = "Talent application"
    name_plural = "Talent applications"
    icon = "fa-solid fa-star"

    column_list = [
        TalentApplication.full_name,
        TalentApplication.email,
        TalentApplication.city,
        TalentApplication.status,
        TalentApplication.price,
        TalentApplication.is_celebrity,
        TalentApplication.click_count,
        TalentApplication.created_at,
    ]
    column_searchable_list = [
        TalentApplication.full_name,
        TalentApplication.email,
        TalentApplication.city,
    ]
    column_sortable_list = [
        TalentApplication.full_name,
        TalentApplication.status,
        TalentApplication.click_count,
        TalentApplication.created_at,
    ]
    form_excluded_columns = [
        TalentApplication.media,
        TalentApplication.created_at,
        TalentApplication.updated_at,
    ]


class MediaUploadAdmin(ModelView, model=MediaUpload):
    name = "Media file"
    name_plural = "Media files"
    icon = "fa-solid fa-photo-film"
    can_create = False
    can_edit = False

    column_list = [
        MediaUpload.original_name,
        MediaUpload.mime_type,
        MediaUpload.file_size,
        MediaUpload.storage_backend,
        MediaUpload.url,
        MediaUpload.uploaded_at,
    ]
    column_sortable_list = [MediaUpload.file_size, MediaUpload.uploaded_at]


class BookingAdmin(ModelView, model=Booking):
    name = "Booking"
    name_plural = "Bookings"
    icon = "fa-solid fa-calendar"

    column_list = [
        Booking.id,
        Booking.user_name,
        Booking.user_email,
        Booking.time_slot_date,
        Booking.time_slot_time,
        Booking.price_range,
        Booking.status,
        Booking.created_at,
    ]
    column_searchable_list = [Booking.id, Booking.user_email, Booking.user_name]
    column_sortable_list = [Booking.time_slot_datetime, Booking.status, Booking.created_at]


ADMIN_VIEWS = [UserAdmin, TalentApplicationAdmin, MediaUploadAdmin, BookingAdmin]
