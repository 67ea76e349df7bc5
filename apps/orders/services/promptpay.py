"""
PromptPay QR payload generation.

PromptPay is the Thai instant-transfer scheme. Banking apps scan an EMVCo
merchant-presented QR code whose payload names the receiving PromptPay id
and, for dynamic codes, the exact amount to transfer.

Format::

    000201 010212 29..(0016A000000677010111 01..<target>) 5802TH 5303764
    54..<amount> 62..(05..<reference>) 6304<crc>

Every field is ``<tag><2-digit length><value>``. The CRC is
CRC-16/CCITT-FALSE over the whole payload including the ``6304`` header
of the CRC field itself.
"""

import base64
import binascii
import re
from decimal import Decimal
from io import BytesIO

from .exceptions import PromptPayConfigurationError


class PromptPayPayloadGenerator:
    """
    Generate PromptPay QR codes for Thai bank transfers.

    Methods:
        generate_payload: Create an EMVCo payload string.
        generate_qr_image: Generate a QR code image from a payload.
        generate_qr_data_url: QR code as a base64 PNG data URL.

    Example:
        Payload for 135.00 THB to a mobile number::

            payload = PromptPayPayloadGenerator.generate_payload(
                promptpay_id='0812345678',
                amount=Decimal('135.00'),
                reference='CS-1A2B3C4D-0042',
            )
            data_url = PromptPayPayloadGenerator.generate_qr_data_url(payload)

    Note:
        Requires the ``qrcode`` library with PIL support.
    """

    GUID = 'A000000677010111'

    TARGET_PHONE = '01'
    TARGET_NATIONAL_ID = '02'
    TARGET_EWALLET = '03'

    COUNTRY_CODE = 'TH'
    CURRENCY_CODE = '764'  # ISO 4217 THB

    POI_STATIC = '11'
    POI_DYNAMIC = '12'

    MAX_REFERENCE_LENGTH = 25

    @staticmethod
    def field(tag, value):
        """Encode one ``tag-length-value`` field."""
        value = str(value)
        if len(value) > 99:
            raise ValueError(f"Field {tag} too long: {len(value)} characters")
        return f'{tag}{len(value):02d}{value}'

    @staticmethod
    def crc16(data):
        """CRC-16/CCITT-FALSE as 4 uppercase hex digits."""
        return f'{binascii.crc_hqx(data.encode("ascii"), 0xFFFF):04X}'

    @staticmethod
    def format_target(promptpay_id):
        """
        Classify and normalize a PromptPay id.

        Returns:
            tuple: (target sub-tag, normalized value)

        Raises:
            PromptPayConfigurationError: If the id is not a 10-digit mobile
                number, 13-digit national/tax id or 15-digit e-wallet id.
        """
        digits = re.sub(r'[\s-]', '', str(promptpay_id or ''))
        if not digits.isdigit():
            raise PromptPayConfigurationError(f"Invalid PromptPay id: {promptpay_id!r}")

        if len(digits) == 15:
            return PromptPayPayloadGenerator.TARGET_EWALLET, digits
        if len(digits) == 13:
            return PromptPayPayloadGenerator.TARGET_NATIONAL_ID, digits
        if len(digits) == 10 and digits.startswith('0'):
            # Mobile numbers drop the trunk prefix for the 66 country code
            return PromptPayPayloadGenerator.TARGET_PHONE, ('66' + digits[1:]).rjust(13, '0')

        raise PromptPayConfigurationError(f"Invalid PromptPay id: {promptpay_id!r}")

    @staticmethod
    def generate_payload(promptpay_id, amount=None, reference=''):
        """
        Generate a PromptPay EMVCo payload string.

        Args:
            promptpay_id (str): Receiving mobile number, national id or
                e-wallet id.
            amount (Decimal, optional): Amount in THB. A positive amount
                produces a dynamic (single-amount) code; otherwise the code
                is static and the payer types the amount.
            reference (str, optional): Reference label shown to the payer
                and used to match the transfer to the order.

        Returns:
            str: Payload ready for QR encoding.
        """
        gen = PromptPayPayloadGenerator
        target_tag, target = gen.format_target(promptpay_id)

        if amount is not None and Decimal(amount) < 0:
            raise ValueError(f"Amount must not be negative: {amount}")
        has_amount = amount is not None and Decimal(amount) > 0

        parts = [
            gen.field('00', '01'),
            gen.field('01', gen.POI_DYNAMIC if has_amount else gen.POI_STATIC),
            gen.field('29', gen.field('00', gen.GUID) + gen.field(target_tag, target)),
            gen.field('58', gen.COUNTRY_CODE),
            gen.field('53', gen.CURRENCY_CODE),
        ]

        if has_amount:
            parts.append(gen.field('54', f'{Decimal(amount):.2f}'))

        if reference:
            # Reference label only allows plain ASCII
            clean_ref = ''.join(c for c in reference if c.isascii() and (c.isalnum() or c == '-'))
            parts.append(gen.field('62', gen.field('05', clean_ref[:gen.MAX_REFERENCE_LENGTH])))

        data = ''.join(parts) + '6304'
        return data + gen.crc16(data)

    @staticmethod
    def generate_qr_image(payload):
        """
        Generate a QR code image from a payload.

        Returns:
            PIL.Image.Image: The QR code image.

        Note:
            Error correction level M (15% recovery), as banking apps expect.
        """
        import qrcode

        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        return qr.make_image(fill_color="black", back_color="white")

    @staticmethod
    def generate_qr_data_url(payload):
        """Render the payload as a ``data:image/png;base64,...`` URL."""
        img = PromptPayPayloadGenerator.generate_qr_image(payload)
        buffer = BytesIO()
        img.save(buffer, format='PNG')
        encoded = base64.b64encode(buffer.getvalue()).decode('ascii')
        return f'data:image/png;base64,{encoded}'
