from flask import current_app

from reportdesk.domain.blocks import BlockType, Photo, PhotoUploadContent, dump_content, parse_content
from reportdesk.domain.exceptions import ValidationError
from reportdesk.utils import media


def _photo_block(editor, block_id) -> PhotoUploadContent:
    block = editor.find(block_id)
    if block.type != BlockType.PHOTO_UPLOAD.value:
        raise ValidationError("Photos can only be added to a photo upload block")
    return parse_content(block.type, block.content)


def photo_paths(blocks):
    """Storage paths of every uploaded photo in the given blocks."""
    paths = []
    for block in blocks:
        if block.type != BlockType.PHOTO_UPLOAD.value:
            continue
        for photo in parse_content(block.type, block.content).photos:
            path = media.path_from_public_url(media.PHOTOS_BUCKET, photo.url)
            if path:
                paths.append(path)
    return paths


def add_photo(editor, block_id, file, caption=""):
    """Upload a photo and append it to a photo upload block."""
    editor.authorize()
    content = _photo_block(editor, block_id)

    path = media.upload(media.PHOTOS_BUCKET, file)
    content.photos.append(Photo(
        url=media.get_public_url(media.PHOTOS_BUCKET, path),
        filename=file.filename,
        caption=caption or "",
    ))

    try:
        return editor.update_block_content(block_id, dump_content(content))
    except Exception:
        # The block never referenced the file
        media.remove(media.PHOTOS_BUCKET, [path])
        raise


def remove_photo(editor, block_id, index):
    editor.authorize()
    content = _photo_block(editor, block_id)

    if not isinstance(index, int) or not 0 <= index < len(content.photos):
        raise ValidationError("Photo not found in this block")

    photo = content.photos.pop(index)
    block = editor.update_block_content(block_id, dump_content(content))

    path = media.path_from_public_url(media.PHOTOS_BUCKET, photo.url)
    if path:
        media.remove(media.PHOTOS_BUCKET, [path])
    else:
        current_app.logger.info("Photo %s is not in local storage; skipped removal", photo.url)

    return block


def delete_block(editor, block_id):
    """Delete a block, then any photos only it referenced."""
    removed = editor.delete_block(block_id)
    media.remove(media.PHOTOS_BUCKET, photo_paths([removed]))
    return removed
