import click
from flask import Flask

from blogapp.extensions import db
from blogapp.models.category import Category
from blogapp.models.user import User, ROLE_ADMIN
from blogapp.utils.slug import slugify


DEFAULT_CATEGORIES = [
    {"name": "Technology", "description": "Latest tech news, tutorials, and insights", "icon": "💻", "color": "#3B82F6"},
    {"name": "Programming", "description": "Coding tutorials, best practices, and tips", "icon": "🔧", "color": "#8B5CF6"},
    {"name": "Design", "description": "UI/UX design, graphics, and creative content", "icon": "🎨", "color": "#EC4899"},
    {"name": "Business", "description": "Business strategies, entrepreneurship, and growth", "icon": "📊", "color": "#10B981"},
    {"name": "Lifestyle", "description": "Life tips, productivity, and personal development", "icon": "🌟", "color": "#F59E0B"},
    {"name": "Travel", "description": "Travel guides, tips, and experiences", "icon": "✈️", "color": "#06B6D4"},
]


def create_admin(email, password, name="Admin"):
    """Return (user, created)."""
    email = email.strip().lower()
    existing = User.query.filter_by(email=email).first()
    if existing:
        return existing, False

    admin = User(name=name, email=email, role=ROLE_ADMIN, is_active=True)
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    return admin, True


def seed_categories(replace=True):
    if replace:
        Category.query.delete()
    for item in DEFAULT_CATEGORIES:
        db.session.add(Category(slug=slugify(item["name"]), is_active=True, **item))
    db.session.commit()
    return len(DEFAULT_CATEGORIES)


def register_commands(app: Flask):
    @app.cli.command("create-admin")
    @click.option("--email", default="admin@example.com", show_default=True)
    @click.option("--password", default="admin123", show_default=True)
    @click.option("--name", default="Admin", show_default=True)
    def create_admin_command(email, password, name):
        """Buat akun admin pertama."""
        user, created = create_admin(email, password, name)
        if not created:
            click.echo(f"Admin user already exists: {user.email}")
            return
        click.echo("✅ Admin user created successfully!")
        click.echo(f"Email: {user.email}")
        click.echo("⚠️  Please change these credentials after first login!")

    @app.cli.command("seed-categories")
    def seed_categories_command():
        """Hapus kategori lama lalu isi kategori default."""
        total = seed_categories()
        click.echo(f"✅ Created {total} categories:")
        for item in DEFAULT_CATEGORIES:
            click.echo(f"  {item['icon']} {item['name']}")
