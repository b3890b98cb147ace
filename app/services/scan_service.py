import json
from datetime import datetime, timezone


# canonical field -> accepted payload keys, first match wins
FIELD_ALIASES = {
    'firstName': ['firstName', 'first_name'],
    'lastName':  ['lastName', 'last_name'],
    'email':     ['email'],
    'phone':     ['phone', 'phoneNumber', 'phone_number'],
    'timestamp': ['timestamp'],
}

# A payload is shown as attendee fields only if it carries one of these
IDENTITY_FIELDS = ('firstName', 'lastName')

# Shown only when present in the payload
OPTIONAL_FIELDS = ('timestamp',)


def format_scanned_at(moment):
    """UTC, millisecond precision, trailing Z (same string as JS Date.toISOString)."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class ScanService:
    """Turns the text read off a QR code into a record for the scanner display."""

    def __init__(self, aliases=None):
        self.aliases = aliases or FIELD_ALIASES

    @staticmethod
    def parse(raw):
        """JSON value of the scanned text, or the text itself if it isn't JSON."""
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return raw

    def resolve(self, data):
        """Map alias keys onto canonical field names; missing fields are omitted."""
        resolved = {}
        for canonical, keys in self.aliases.items():
            for key in keys:
                if data.get(key):
                    resolved[canonical] = data[key]
                    break
        return resolved

    def to_display_record(self, raw, scanned_at=None):
        scanned_at = format_scanned_at(scanned_at or datetime.now(timezone.utc))
        parsed = self.parse(raw)

        if isinstance(parsed, dict):
            fields = self.resolve(parsed)
            if any(name in fields for name in IDENTITY_FIELDS):
                record = {name: fields.get(name, '') for name in self.aliases
                          if name not in OPTIONAL_FIELDS}
                for name in OPTIONAL_FIELDS:
                    if name in fields:
                        record[name] = fields[name]
                record['scannedAt'] = scanned_at
                return record

        return {'rawValue': raw, 'scannedAt': scanned_at}

    def aliases_json(self):
        """Alias table for the scanner page script."""
        return json.dumps(self.aliases)

    def optional_fields_json(self):
        return json.dumps(list(OPTIONAL_FIELDS))
