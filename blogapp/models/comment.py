import re
from datetime import datetime
from blogapp.extensions import db
from blogapp.utils.dates import to_iso


# Tanpa quantifier bersarang
EMAIL_REGEX = r"^[\w\.-]+@[\w\.-]+\.\w+$"
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 120
MAX_CONTENT_LENGTH = 1000


class Comment(db.Model):
    __tablename__ = 'comments'
    __table_args__ = (
        db.Index('ix_comments_blog_created', 'blog_id', 'created_at'),
    )

    id = db.Column(db.Integer, primary_key=True)

    # Referensi tanpa foreign key: komentar boleh tertinggal (yatim) setelah
    # blog atau komentar induknya dihapus.
    blog_id = db.Column(db.Integer, nullable=False)
    parent_id = db.Column(db.Integer, nullable=True, index=True)

    # Komentator publik (tanpa login)
    name = db.Column(db.String(MAX_NAME_LENGTH), nullable=False)
    email = db.Column(db.String(MAX_EMAIL_LENGTH), nullable=False)
    content = db.Column(db.Text, nullable=False)

    is_approved = db.Column(db.Boolean, nullable=False, default=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    blog = db.relationship(
        'Blog',
        primaryjoin='foreign(Comment.blog_id) == Blog.id',
        viewonly=True,
    )

    @staticmethod
    def validate_fields(name, email, content) -> list[str]:
        errors: list[str] = []
        if len(name) > MAX_NAME_LENGTH:
            errors.append(f"Name cannot exceed {MAX_NAME_LENGTH} characters")
        if len(email) > MAX_EMAIL_LENGTH or not re.match(EMAIL_REGEX, email):
            errors.append("Please provide a valid email")
        if len(content) > MAX_CONTENT_LENGTH:
            errors.append(f"Comment cannot exceed {MAX_CONTENT_LENGTH} characters")
        return errors

    def to_dict(self, with_blog=False, blog_fields=('id', 'title', 'slug')):
        data = {
            'id': self.id,
            'blog': self.blog_id,
            'name': self.name,
            'email': self.email,
            'content': self.content,
            'isApproved': self.is_approved,
            'parentComment': self.parent_id,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }
        if with_blog:
            blog = self.blog
            data['blog'] = {field: getattr(blog, field) for field in blog_fields} if blog else None
        return data

    def __repr__(self):
        return f"<Comment {self.id} on blog {self.blog_id}>"
