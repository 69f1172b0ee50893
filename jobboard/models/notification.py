from datetime import datetime
from dataclasses import dataclass
from typing import ClassVar, Optional, Union
from jobboard import db


NOTIFICATION_TYPES = ('application', 'shortlist', 'rejection', 'job_update')


@dataclass(frozen=True)
class JobRef:
    """Notification is about a Job"""
    id: int
    kind: ClassVar[str] = 'job'


@dataclass(frozen=True)
class ApplicationRef:
    """Notification is about an Application"""
    id: int
    kind: ClassVar[str] = 'application'


RelatedRef = Union[JobRef, ApplicationRef]

_REF_TYPES = {ref_type.kind: ref_type for ref_type in (JobRef, ApplicationRef)}


class Notification(db.Model):
    """Per-user event record derived from hiring workflow transitions"""
    __tablename__ = 'notifications'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    message = db.Column(db.String(500), nullable=False)
    type = db.Column(db.String(30), nullable=False)  # application, shortlist, rejection, job_update
    is_read = db.Column(db.Boolean, default=False, nullable=False)

    # Tagged reference, only ever read or written through `related`
    related_kind = db.Column(db.String(20))
    related_id = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = db.relationship('User', backref=db.backref('notifications', lazy='dynamic'))

    def __repr__(self):
        return f'<Notification {self.id} user={self.user_id} type={self.type}>'

    @property
    def related(self) -> Optional[RelatedRef]:
        ref_type = _REF_TYPES.get(self.related_kind)
        if ref_type is None or self.related_id is None:
            return None
        return ref_type(self.related_id)

    @related.setter
    def related(self, ref: Optional[RelatedRef]):
        if ref is None:
            self.related_kind = None
            self.related_id = None
            return
        if type(ref) not in _REF_TYPES.values():
            raise TypeError(f'Unsupported notification reference: {ref!r}')
        self.related_kind = ref.kind
        self.related_id = ref.id

    def mark_read(self):
        self.is_read = True

    def to_dict(self, related=None):
        ref = self.related
        return {
            'id': self.id,
            'user_id': self.user_id,
            'message': self.message,
            'type': self.type,
            'is_read': self.is_read,
            'related': related if related is not None else (
                {'kind': ref.kind, 'id': ref.id} if ref else None
            ),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
