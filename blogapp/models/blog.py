from datetime import datetime
from blogapp.extensions import db
from blogapp.utils.dates import to_iso


class Blog(db.Model):
    __tablename__ = 'blogs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(240), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500), nullable=False)
    content = db.Column(db.Text, nullable=False) # HTML
    image = db.Column(db.String(255), nullable=False, default='') # path gambar, '' kalau kosong
    tags = db.Column(db.JSON, nullable=False, default=list)

    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False, index=True)
    # NULL kalau user penulisnya sudah dihapus; author_name tetap jadi snapshot
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)
    author_name = db.Column(db.String(100), nullable=False, default='')

    is_published = db.Column(db.Boolean, nullable=False, default=False)
    published_at = db.Column(db.DateTime, nullable=True)
    views = db.Column(db.Integer, nullable=False, default=0)
    generated_by_ai = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relasi
    category = db.relationship('Category', backref=db.backref('blogs', lazy='dynamic'))
    author = db.relationship('User', backref=db.backref('blogs', lazy='dynamic'))

    def _author_dict(self, with_bio=False):
        if not self.author:
            return None
        data = {
            'id': self.author.id,
            'name': self.author.name,
            'email': self.author.email,
            'avatar': self.author.avatar,
        }
        if with_bio:
            data['bio'] = self.author.bio
        return data

    def to_dict(self, detail=False):
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'content': self.content,
            'image': self.image or '',
            'tags': list(self.tags or []),
            'category': self.category.to_summary() if self.category else None,
            'author': self._author_dict(with_bio=detail),
            'authorName': self.author_name,
            'isPublished': self.is_published,
            'publishedAt': to_iso(self.published_at),
            'views': self.views,
            'generatedByAI': self.generated_by_ai,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }

    def to_brief(self):
        """Populate ringan untuk dashboard statistik."""
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'isPublished': self.is_published,
            'views': self.views,
            'authorName': self.author_name,
            'category': {'id': self.category.id, 'name': self.category.name} if self.category else None,
            'author': {'id': self.author.id, 'name': self.author.name} if self.author else None,
            'createdAt': to_iso(self.created_at),
        }

    def __repr__(self):
        return f"<Blog {self.title}>"
