from datetime import datetime
from blogapp.extensions import db
from blogapp.utils.dates import to_iso


class Category(db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    slug = db.Column(db.String(60), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500), nullable=True)
    icon = db.Column(db.String(20), nullable=True)
    color = db.Column(db.String(20), nullable=True, default='#3B82F6')
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_summary(self):
        """Versi ringkas untuk populate di dalam blog."""
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'icon': self.icon,
            'color': self.color,
        }

    def to_dict(self):
        data = self.to_summary()
        data.update({
            'description': self.description,
            'isActive': self.is_active,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        })
        return data

    def __repr__(self):
        return f"<Category {self.name}>"
