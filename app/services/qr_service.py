import base64
import io
import json
import logging
from datetime import datetime, timezone

import qrcode
import qrcode.image.svg
from qrcode.exceptions import DataOverflowError


logger = logging.getLogger(__name__)

PNG_DATA_URL_PREFIX = 'data:image/png;base64,'

PAYLOAD_FIELDS = ('firstName', 'lastName', 'email', 'phone')

ERROR_CORRECTION_LEVELS = {
    'L': qrcode.constants.ERROR_CORRECT_L,
    'M': qrcode.constants.ERROR_CORRECT_M,
    'Q': qrcode.constants.ERROR_CORRECT_Q,
    'H': qrcode.constants.ERROR_CORRECT_H,
}


class EncodingError(Exception):
    """The QR encoder rejected the payload."""


class QRService:
    """QR code payload encoding and rendering for attendee tickets."""

    def __init__(self, version=8, box_size=4, border=1, error_correction='L'):
        self.version          = version
        self.box_size         = box_size
        self.border           = border
        self.error_correction = ERROR_CORRECTION_LEVELS.get(
            str(error_correction).upper(), qrcode.constants.ERROR_CORRECT_L
        )

    @classmethod
    def from_config(cls, app_config):
        return cls(
            version=app_config.get('QR_VERSION', 8),
            box_size=app_config.get('QR_BOX_SIZE', 4),
            border=app_config.get('QR_BORDER', 1),
            error_correction=app_config.get('QR_ERROR_CORRECTION', 'L'),
        )

    # ── Payload ───────────────────────────────────────────────────────────────

    @staticmethod
    def encode_payload(attendee, generated_at=None):
        """
        Serialize the attendee into the text stored in the QR code.

        Keys are always emitted in the same order with compact separators,
        so equal input (and timestamp) yields an equal payload. The payload
        is not signed.
        """
        generated_at = generated_at or datetime.now(timezone.utc)
        data = {name: attendee.get(name, '') for name in PAYLOAD_FIELDS}
        data['timestamp'] = generated_at.isoformat().replace('+00:00', 'Z')
        return json.dumps(data, separators=(',', ':'), ensure_ascii=False)

    @staticmethod
    def decode_payload(text):
        """Best-effort JSON parse of scanned text; None if it is not a JSON object."""
        try:
            data = json.loads(text)
        except (TypeError, ValueError):
            return None
        return data if isinstance(data, dict) else None

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render_as_image(self, payload):
        """
        Render the payload as a PNG data URL.

        The first attempt uses the configured fixed symbol version so tickets
        come out at a constant size. If the payload does not fit, retry once
        with an auto-sized symbol and qrcode's default settings.
        """
        try:
            return self._png_data_url(
                payload,
                version=self.version,
                fit=False,
                box_size=self.box_size,
                border=self.border,
                error_correction=self.error_correction,
            )
        except (DataOverflowError, ValueError) as e:
            logger.warning("QR render failed at version %s (%s), retrying auto-sized",
                           self.version, e)

        try:
            data_url = self._png_data_url(payload, version=None, fit=True)
        except (DataOverflowError, ValueError) as e:
            logger.error("Fallback QR render failed: %s", e)
            raise EncodingError('Failed to generate QR code') from e

        logger.info("Fallback QR generated | length=%d", len(data_url))
        return data_url

    def render_as_vector(self, payload):
        """Render the payload as inline SVG markup for on-page display."""
        qr = qrcode.QRCode(
            error_correction=self.error_correction,
            border=self.border,
            image_factory=qrcode.image.svg.SvgPathImage,
        )
        try:
            qr.add_data(payload)
            qr.make(fit=True)
        except (DataOverflowError, ValueError) as e:
            raise EncodingError('Failed to generate QR code') from e

        buffer = io.BytesIO()
        qr.make_image().save(buffer)
        svg = buffer.getvalue().decode('utf-8')
        # Drop the XML declaration so the markup can be embedded in HTML
        if svg.startswith('<?xml'):
            svg = svg.split('?>', 1)[1].lstrip()
        return svg

    def generate(self, attendee):
        """Return (payload, png_data_url) for an attendee."""
        payload = self.encode_payload(attendee)
        return payload, self.render_as_image(payload)

    # ── Internals ─────────────────────────────────────────────────────────────

    @staticmethod
    def _png_data_url(payload, version, fit, box_size=10, border=4,
                      error_correction=qrcode.constants.ERROR_CORRECT_M):
        qr = qrcode.QRCode(
            version=version,
            error_correction=error_correction,
            box_size=box_size,
            border=border,
        )
        qr.add_data(payload)
        qr.make(fit=fit)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        img_str = base64.b64encode(buffer.getvalue()).decode()

        data_url = f"{PNG_DATA_URL_PREFIX}{img_str}"
        if not buffer.getvalue().startswith(b'\x89PNG'):
            raise ValueError('Encoder did not produce a PNG image')
        return data_url
