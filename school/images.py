"""Storage helpers for teacher photos and news images.

Teacher photos sit in a private bucket, so pages only ever show short-lived
signed URLs.  The ``image`` column has held three formats over time: full
public URLs, bucket-relative paths (``teachers/<file>``) and bare object
names; :func:`normalize_object_name` reduces all of them to the object name.
"""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings

from .backend import BACKEND_ERRORS

logger = logging.getLogger(__name__)

TEACHERS_BUCKET = 'teachers'
NEWS_BUCKET = 'news'


def normalize_object_name(raw, bucket=TEACHERS_BUCKET):
    value = (raw or '').strip()
    if not value:
        return ''

    marker = f'/{bucket}/'
    idx = value.find(marker)
    if idx != -1:
        return value[idx + len(marker):]

    prefix = f'{bucket}/'
    if value.startswith(prefix):
        return value[len(prefix):]

    return value


def resolve_signed_url(client, object_name, bucket=TEACHERS_BUCKET, expires_in=None):
    """Signed URL for ``object_name`` or ``""`` when there is none to give."""
    if not object_name:
        return ''
    if expires_in is None:
        expires_in = settings.SIGNED_URL_TTL
    try:
        data = client.storage.from_(bucket).create_signed_url(object_name, expires_in)
    except BACKEND_ERRORS as e:
        logger.warning(f"create_signed_url failed for {bucket}/{object_name}: {e}")
        return ''
    return data.get('signedUrl') or data.get('signedURL') or ''


def sign_image(client, raw, bucket=TEACHERS_BUCKET):
    return resolve_signed_url(client, normalize_object_name(raw, bucket), bucket)


def sign_images(client, values, bucket=TEACHERS_BUCKET):
    """Sign every stored reference in ``values``; one request per entry."""
    values = list(values)
    if not values:
        return []
    with ThreadPoolExecutor(max_workers=min(8, len(values))) as pool:
        return list(pool.map(lambda raw: sign_image(client, raw, bucket), values))


def file_extension(name):
    parts = (name or '').split('.')
    return parts[-1].lower() if len(parts) > 1 and parts[-1] else 'png'


def upload_image(client, bucket, uploaded_file):
    """Upload a Django ``UploadedFile`` and return the new object name.

    Storage errors propagate; a row saved afterwards is a separate request,
    so a failed save can leave the uploaded object orphaned.
    """
    object_name = f'{uuid.uuid4()}.{file_extension(uploaded_file.name)}'
    client.storage.from_(bucket).upload(
        object_name,
        uploaded_file.read(),
        file_options={
            'cache-control': '3600',
            'upsert': 'false',
            'content-type': getattr(uploaded_file, 'content_type', None) or 'image/*',
        },
    )
    logger.info(f"Uploaded {bucket}/{object_name}")
    return object_name


def public_url(client, bucket, object_name):
    return client.storage.from_(bucket).get_public_url(object_name)
