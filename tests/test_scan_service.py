from datetime import datetime, timedelta, timezone

from app.services.qr_service import QRService
from app.services.scan_service import ScanService


SCANNED_AT = datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc)


def test_generated_payload_decodes_to_attendee_fields(attendee):
    payload = QRService.encode_payload(attendee)
    record  = ScanService().to_display_record(payload, scanned_at=SCANNED_AT)

    assert {k: record[k] for k in attendee} == attendee
    assert record['timestamp']
    assert record['scannedAt'] == '2026-10-19T18:00:00.000Z'


def test_snake_case_aliases_are_accepted():
    raw = '{"first_name": "Ann", "last_name": "Lee", "email": "ann@x.com", "phone_number": "5551112222"}'
    record = ScanService().to_display_record(raw, scanned_at=SCANNED_AT)

    assert record['firstName'] == 'Ann'
    assert record['lastName'] == 'Lee'
    assert record['phone'] == '5551112222'
    assert 'timestamp' not in record


def test_canonical_key_wins_over_alias():
    raw = '{"firstName": "Canon", "first_name": "Alias"}'
    assert ScanService().to_display_record(raw)['firstName'] == 'Canon'


def test_non_json_is_shown_raw():
    record = ScanService().to_display_record('REG-42', scanned_at=SCANNED_AT)
    assert record == {'rawValue': 'REG-42', 'scannedAt': '2026-10-19T18:00:00.000Z'}


def test_json_without_identity_fields_is_shown_raw():
    raw = '{"ticket": 42}'
    assert ScanService().to_display_record(raw)['rawValue'] == raw


def test_repeat_scans_are_not_deduplicated(attendee):
    service = ScanService()
    payload = QRService.encode_payload(attendee)

    first  = service.to_display_record(payload, scanned_at=SCANNED_AT)
    second = service.to_display_record(payload, scanned_at=SCANNED_AT)
    assert first == second


def test_decode_scan_command(app, attendee):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['decode-scan', QRService.encode_payload(attendee)])

    assert result.exit_code == 0
    assert 'jane@x.com' in result.output


def test_custom_alias_table_shapes_the_record():
    aliases = {
        'firstName': ['given'],
        'lastName':  ['family'],
        'badge':     ['badge_no'],
    }
    raw = '{"given": "Ann", "family": "Lee", "email": "ann@x.com"}'
    record = ScanService(aliases).to_display_record(raw, scanned_at=SCANNED_AT)

    assert record == {
        'firstName': 'Ann',
        'lastName':  'Lee',
        'badge':     '',
        'scannedAt': '2026-10-19T18:00:00.000Z',
    }


def test_unresolved_fields_are_blank():
    record = ScanService().to_display_record('{"firstName": "Ann"}', scanned_at=SCANNED_AT)

    assert list(record) == ['firstName', 'lastName', 'email', 'phone', 'scannedAt']
    assert record['lastName'] == record['email'] == record['phone'] == ''


def test_scanned_at_is_utc_with_millisecond_z_suffix():
    local = datetime(2026, 10, 19, 20, 0, 0, 123456,
                     tzinfo=timezone(timedelta(hours=2)))
    record = ScanService().to_display_record('REG-42', scanned_at=local)

    assert record['scannedAt'] == '2026-10-19T18:00:00.123Z'
