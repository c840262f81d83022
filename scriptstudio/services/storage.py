import base64
import io
import json

from PIL import Image

from scriptstudio.types import ScriptResult


PREVIEW_SIZE = (320, 320)


def attachment_preview_data_url(data: bytes, *, size: tuple = PREVIEW_SIZE, quality: int = 70) -> str:
    """JPEG thumbnail of an uploaded image, bounded by `size`, as a data URL."""
    img = Image.open(io.BytesIO(data))
    img.thumbnail(size)
    buffer = io.BytesIO()
    img.convert("RGB").save(buffer, format="JPEG", quality=quality)
    return "data:image/jpeg;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def result_to_json(result: ScriptResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)


def result_to_json_bytes(result: ScriptResult) -> bytes:
    return result_to_json(result).encode("utf-8")
