from wtforms import StringField, DateTimeField
from wtforms.validators import AnyOf, Optional

from models.networth import NetWorthEventType
from utils.forms import ApiForm


class NetWorthSnapshotForm(ApiForm):
    """Body for recording a snapshot of the current net worth"""
    event_type = StringField('Event type', name='eventType', validators=[
        Optional(),
        AnyOf(NetWorthEventType.ALL, message='Invalid event type')
    ])
    event_date = DateTimeField('Event date', name='eventDate', format=[
        '%Y-%m-%dT%H:%M:%S.%fZ',
        '%Y-%m-%dT%H:%M:%SZ',
        '%Y-%m-%dT%H:%M:%S',
        '%Y-%m-%d %H:%M:%S',
        '%Y-%m-%d',
    ], validators=[Optional()])
