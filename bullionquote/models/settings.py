"""Application settings model."""
from bullionquote import db
from bullionquote.utils import utcnow


class Setting(db.Model):
    __tablename__ = 'settings'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @staticmethod
    def get(key, default=None):
        s = db.session.get(Setting, key)
        return s.value if s and s.value is not None else default

    @staticmethod
    def set(key, value):
        """Upsert in the current transaction; the caller commits."""
        s = db.session.get(Setting, key)
        if s:
            s.value = str(value) if value is not None else None
            s.updated_at = utcnow()
        else:
            s = Setting(key=key, value=str(value) if value is not None else None)
            db.session.add(s)
        db.session.flush()
        return s

    @staticmethod
    def all():
        return {s.key: {'value': s.value, 'updated_at': s.updated_at}
                for s in Setting.query.order_by(Setting.key).all()}

    def __repr__(self):
        return f'<Setting {self.key}>'
