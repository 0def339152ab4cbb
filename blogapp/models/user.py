from datetime import datetime
from blogapp.extensions import db, bcrypt
from blogapp.utils.dates import to_iso


ROLE_ADMIN = 'admin'
ROLE_PUBLISHER = 'publisher'
ROLES = {ROLE_ADMIN, ROLE_PUBLISHER}


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    role = db.Column(db.String(20), nullable=False, default=ROLE_PUBLISHER) # 'admin' / 'publisher'
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    avatar = db.Column(db.String(255), nullable=True)
    bio = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def set_password(self, password):
        # Hash Bcrypt (hasilnya bytes, jadi decode ke utf-8 biar jadi string)
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        # password_hash tidak pernah ikut keluar
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'isActive': self.is_active,
            'avatar': self.avatar,
            'bio': self.bio,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }

    def __repr__(self):
        return f"<User {self.email}>"
