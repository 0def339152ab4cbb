import logging
import math
from datetime import datetime

from flask import Blueprint, request, current_app
from sqlalchemy import or_, func

from blogapp.extensions import db
from blogapp.errors import AIUnavailable
from blogapp.middleware.auth import protect, authorize
from blogapp.models.blog import Blog
from blogapp.models.category import Category
from blogapp.models.comment import Comment
from blogapp.models.user import ROLE_ADMIN
from blogapp.policies import can_modify_blog
from blogapp.utils.request_data import json_body, text_value, raw_text
from blogapp.utils.response import success, error
from blogapp.utils.slug import unique_slug

logger = logging.getLogger(__name__)

blog_bp = Blueprint('blogs', __name__, url_prefix='/api/blogs')

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


# =========================
# HELPERS
# =========================
def _content_generator():
    return current_app.extensions['content_generator']


def _normalize_tags(raw) -> list[str]:
    """Terima list atau string "a,b"; hasilnya unik, urutan dipertahankan."""
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(',')
    elif not isinstance(raw, list):
        return []
    tags = []
    for tag in raw:
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _increment_views(blog):
    # UPDATE ... SET views = views + 1 (atomic di level database)
    Blog.query.filter_by(id=blog.id).update(
        {Blog.views: Blog.views + 1}, synchronize_session=False
    )
    db.session.commit()
    db.session.refresh(blog)


def _find_category(value):
    try:
        return db.session.get(Category, int(value))
    except (TypeError, ValueError):
        return None


def _not_authorized(action):
    return error(f"Not authorized to {action} this blog", 403)


# --- 1. LIST BLOGS (Public) ---
@blog_bp.route('', methods=['GET'])
def get_blogs():
    category_id = request.args.get('category', type=int)
    author_id = request.args.get('author', type=int)
    published = request.args.get('published')
    search = (request.args.get('search') or '').strip()

    page = max(1, request.args.get('page', default=1, type=int) or 1)
    limit = request.args.get('limit', default=DEFAULT_PAGE_SIZE, type=int) or DEFAULT_PAGE_SIZE
    limit = max(1, min(limit, MAX_PAGE_SIZE))

    query = Blog.query

    if category_id is not None:
        query = query.filter(Blog.category_id == category_id)
    if author_id is not None:
        query = query.filter(Blog.author_id == author_id)
    if published is not None:
        query = query.filter(Blog.is_published == (published.lower() == 'true'))
    if search:
        # % dan _ dari user dicari sebagai karakter biasa
        query = query.filter(
            or_(
                Blog.title.icontains(search, autoescape=True),
                Blog.description.icontains(search, autoescape=True),
                Blog.content.icontains(search, autoescape=True),
            )
        )

    count = query.count()
    blogs = (
        query.order_by(Blog.created_at.desc(), Blog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return success(
        count=count,
        totalPages=math.ceil(count / limit),
        currentPage=page,
        blogs=[b.to_dict() for b in blogs],
    )


# --- 2. DETAIL BLOG (by id / by slug), views +1 ---
@blog_bp.route('/<int:blog_id>', methods=['GET'])
def get_blog(blog_id):
    blog = db.session.get(Blog, blog_id)
    if not blog:
        return error("Blog not found", 404)

    _increment_views(blog)
    return success(blog=blog.to_dict(detail=True))


@blog_bp.route('/slug/<slug>', methods=['GET'])
def get_blog_by_slug(slug):
    blog = Blog.query.filter_by(slug=slug).first()
    if not blog:
        return error("Blog not found", 404)

    _increment_views(blog)
    return success(blog=blog.to_dict(detail=True))


# --- 3. CREATE BLOG (semua user yang login) ---
@blog_bp.route('', methods=['POST'])
@protect
def create_blog():
    user = request.current_user
    data = json_body()

    title = text_value(data.get('title'))
    description = text_value(data.get('description'))
    content = raw_text(data.get('content'))
    category_id = data.get('category')

    if not title or not description or not content.strip() or not category_id:
        return error("Please provide all required fields", 400)

    category = _find_category(category_id)
    if not category:
        return error("Category not found", 404)

    blog = Blog(
        title=title,
        slug=unique_slug(Blog, title),
        description=description,
        content=content,
        category_id=category.id,
        author_id=user.id,
        author_name=user.name,
        image=text_value(data.get('image')),
        tags=_normalize_tags(data.get('tags')),
    )
    db.session.add(blog)
    db.session.commit()

    logger.info("Blog %s created by user %s", blog.id, user.id)
    return success("Blog created successfully", 201, blog=blog.to_dict())


# --- 4. UPDATE BLOG (penulis atau admin) ---
@blog_bp.route('/<int:blog_id>', methods=['PUT'])
@protect
def update_blog(blog_id):
    user = request.current_user
    blog = db.session.get(Blog, blog_id)

    if not blog:
        return error("Blog not found", 404)

    # Validasi kepemilikan dulu, sebelum isi payload dicek
    if not can_modify_blog(user, blog):
        return _not_authorized("update")

    data = json_body()

    title = text_value(data.get('title'))
    if title and title != blog.title:
        blog.title = title
        blog.slug = unique_slug(Blog, title, exclude_id=blog.id)
    description = text_value(data.get('description'))
    if description:
        blog.description = description
    if raw_text(data.get('content')).strip():
        blog.content = data['content']
    if data.get('category'):
        category = _find_category(data["category"])
        if not category:
            return error("Category not found", 404)
        blog.category_id = category.id
    if 'image' in data:
        # '' berarti hapus gambar
        blog.image = text_value(data['image'])
    if data.get('tags') is not None:
        blog.tags = _normalize_tags(data['tags'])

    db.session.commit()
    return success("Blog updated successfully", blog=blog.to_dict())


# --- 5. DELETE BLOG (penulis atau admin) ---
@blog_bp.route('/<int:blog_id>', methods=['DELETE'])
@protect
def delete_blog(blog_id):
    user = request.current_user
    blog = db.session.get(Blog, blog_id)

    if not blog:
        return error("Blog not found", 404)

    if not can_modify_blog(user, blog):
        return _not_authorized("delete")

    comment_query = Comment.query.filter_by(blog_id=blog.id)
    comment_count = comment_query.count()

    if current_app.config.get('CASCADE_BLOG_COMMENTS'):
        comment_query.delete(synchronize_session=False)
    elif comment_count:
        logger.warning(
            "Blog %s deleted; %d comment(s) left without a blog", blog.id, comment_count
        )

    db.session.delete(blog)
    db.session.commit()

    return success("Blog deleted successfully")


# --- 6. PUBLISH / UNPUBLISH (Admin) ---
@blog_bp.route('/<int:blog_id>/publish', methods=['PATCH'])
@protect
@authorize(ROLE_ADMIN)
def toggle_publish(blog_id):
    blog = db.session.get(Blog, blog_id)
    if not blog:
        return error("Blog not found", 404)

    blog.is_published = not blog.is_published
    blog.published_at = datetime.utcnow() if blog.is_published else None
    db.session.commit()

    state = 'published' if blog.is_published else 'unpublished'
    return success(f"Blog {state} successfully", blog=blog.to_dict())


# --- 7. AI: GENERATE / IMPROVE / IDEAS ---
@blog_bp.route('/generate', methods=['POST'])
@protect
def generate_blog():
    """
    POST /api/blogs/generate
    Body JSON: {"topic": "...", "category": 1, "tone": "casual"}
    """
    user = request.current_user
    data = json_body()

    topic = text_value(data.get('topic'))
    category_id = data.get('category')
    tone = text_value(data.get('tone')) or 'professional'

    if not topic or not category_id:
        return error("Please provide topic and category", 400)

    category = _find_category(category_id)
    if not category:
        return error("Category not found", 404)

    try:
        generated = _content_generator().generate_article(topic, category.name, tone)
    except AIUnavailable as e:
        return error(e.message, 500)

    title = (generated.get('title') or topic).strip()[:200]
    blog = Blog(
        title=title,
        slug=unique_slug(Blog, title),
        description=(generated.get('description') or '')[:500],
        content=generated.get('content') or '',
        category_id=category.id,
        author_id=user.id,
        author_name=user.name,
        image='',
        tags=[],
        generated_by_ai=True,
    )
    db.session.add(blog)
    db.session.commit()

    return success("Blog generated successfully", 201, blog=blog.to_dict())


@blog_bp.route('/<int:blog_id>/improve', methods=['POST'])
@protect
def improve_blog(blog_id):
    user = request.current_user
    data = json_body()
    instruction = text_value(data.get('instruction'))

    if not instruction:
        return error("Please provide improvement instruction", 400)

    blog = db.session.get(Blog, blog_id)
    if not blog:
        return error("Blog not found", 404)

    if not can_modify_blog(user, blog):
        return _not_authorized("improve")

    try:
        improved = _content_generator().improve_article(blog.content, instruction)
    except AIUnavailable as e:
        return error(e.message, 500)

    blog.content = improved
    db.session.commit()

    return success("Blog improved successfully", blog=blog.to_dict())


@blog_bp.route('/ideas', methods=['POST'])
@protect
def get_blog_ideas():
    data = json_body()
    category_id = data.get('category')

    if not category_id:
        return error("Please provide category", 400)

    try:
        count = int(data.get('count') or 5)
    except (TypeError, ValueError):
        return error("count must be a number", 400)
    count = max(1, min(count, 20))

    category = _find_category(category_id)
    if not category:
        return error("Category not found", 404)

    try:
        ideas = _content_generator().suggest_ideas(category.name, count)
    except AIUnavailable as e:
        return error(e.message, 500)

    return success(ideas=ideas)


# --- 8. STATISTIK DASHBOARD ---
@blog_bp.route('/stats/all', methods=['GET'])
@protect
def get_blog_stats():
    total_blogs = Blog.query.count()
    published_blogs = Blog.query.filter_by(is_published=True).count()
    draft_blogs = Blog.query.filter_by(is_published=False).count()
    total_views = db.session.query(func.coalesce(func.sum(Blog.views), 0)).scalar()

    recent_blogs = Blog.query.order_by(Blog.created_at.desc(), Blog.id.desc()).limit(5).all()
    top_blogs = (
        Blog.query.filter_by(is_published=True)
        .order_by(Blog.views.desc(), Blog.id.desc())
        .limit(5)
        .all()
    )

    return success(
        stats={
            'totalBlogs': total_blogs,
            'publishedBlogs': published_blogs,
            'draftBlogs': draft_blogs,
            'totalViews': int(total_views or 0),
            'recentBlogs': [b.to_brief() for b in recent_blogs],
            'topBlogs': [b.to_brief() for b in top_blogs],
        }
    )
