"""
Bucket-style object storage on the local filesystem.

Paths are relative to a bucket; buckets live under ``UPLOAD_FOLDER``.
Files are never deduplicated: every upload gets a fresh random name.
"""
import os
import time
import uuid
from werkzeug.utils import secure_filename
from flask import current_app

from reportdesk.domain.exceptions import NotFoundError, ValidationError

PHOTOS_BUCKET = "inspection-photos"
KNOWLEDGE_BASE_BUCKET = "knowledge-base"

ALLOWED_EXTENSIONS = {
    PHOTOS_BUCKET: {'png', 'jpg', 'jpeg', 'gif', 'webp', 'heic'},
    KNOWLEDGE_BASE_BUCKET: {'pdf', 'docx', 'doc', 'xlsx', 'xls', 'csv', 'txt', 'md'},
}


def file_extension(filename):
    if not filename or '.' not in filename:
        return None
    return filename.rsplit('.', 1)[1].lower()


def allowed_file(bucket, filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS.get(bucket, set())


def bucket_root(bucket):
    if bucket not in ALLOWED_EXTENSIONS:
        raise ValidationError(f"Unknown storage bucket: {bucket}")

    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(upload_folder):
        upload_folder = os.path.join(current_app.instance_path, upload_folder)
    return os.path.join(upload_folder, bucket)


def _resolve(bucket, path):
    root = os.path.abspath(bucket_root(bucket))
    full_path = os.path.abspath(os.path.join(root, path))
    if os.path.commonpath([root, full_path]) != root:
        raise ValidationError("Invalid storage path")
    return full_path


def unique_filename(filename):
    """<random>-<epoch millis>.<ext>"""
    ext = file_extension(filename)
    return f"{uuid.uuid4().hex[:12]}-{int(time.time() * 1000)}.{ext}"


def upload(bucket, file, folder=None, keep_name=False):
    """Store an uploaded ``FileStorage``; returns its path inside the bucket."""
    if not file or not file.filename:
        raise ValidationError("No file provided")
    if not allowed_file(bucket, file.filename):
        raise ValidationError("File type not allowed")

    if keep_name:
        filename = f"{int(time.time() * 1000)}-{secure_filename(file.filename)}"
    else:
        filename = unique_filename(file.filename)
    path = f"{secure_filename(folder)}/{filename}" if folder else filename

    full_path = _resolve(bucket, path)
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    file.save(full_path)

    current_app.logger.debug("Stored %s/%s", bucket, path)
    return path


def get_public_url(bucket, path):
    base = current_app.config.get('STORAGE_PUBLIC_URL', '/storage').rstrip('/')
    return f"{base}/{bucket}/{path}"


def path_from_public_url(bucket, url):
    prefix = get_public_url(bucket, "")
    if not url or not url.startswith(prefix):
        return None
    return url[len(prefix):]


def download(bucket, path):
    full_path = _resolve(bucket, path)
    if not os.path.exists(full_path):
        raise NotFoundError(f"File {path} not found")

    with open(full_path, "rb") as fh:
        return fh.read()


def remove(bucket, paths):
    """
    Deletes stored objects. Missing files are skipped; returns the paths
    that were actually removed.
    """
    removed = []
    for path in paths:
        if not path:
            continue
        full_path = _resolve(bucket, path)
        if os.path.exists(full_path):
            try:
                os.remove(full_path)
                removed.append(path)
            except OSError as e:
                current_app.logger.error(f"Failed to delete file {full_path}: {e}")
    return removed
