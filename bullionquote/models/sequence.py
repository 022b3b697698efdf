"""Durable named counters."""
from bullionquote import db


class Sequence(db.Model):
    __tablename__ = 'sequences'

    name = db.Column(db.String(50), primary_key=True)
    value = db.Column(db.Integer, nullable=False)

    def __repr__(self):
        return f'<Sequence {self.name}={self.value}>'
