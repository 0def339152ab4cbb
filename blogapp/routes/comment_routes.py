import logging

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from blogapp.extensions import db
from blogapp.middleware.auth import protect, authorize
from blogapp.models.blog import Blog
from blogapp.models.comment import Comment
from blogapp.models.user import ROLE_ADMIN
from blogapp.utils.request_data import json_body, text_value
from blogapp.utils.response import success, error

logger = logging.getLogger(__name__)

comment_bp = Blueprint("comments", __name__, url_prefix="/api/comments")


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# --- 1. KOMENTAR PER BLOG (Public) ---
@comment_bp.route("/blog/<int:blog_id>", methods=["GET"])
def get_blog_comments(blog_id):
    comments = (
        Comment.query
        .filter_by(blog_id=blog_id, is_approved=True, parent_id=None)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )

    # Ambil semua balasan sekaligus lalu kelompokkan per induk
    replies_by_parent = {c.id: [] for c in comments}
    if replies_by_parent:
        replies = (
            Comment.query
            .filter(Comment.parent_id.in_(list(replies_by_parent)), Comment.is_approved.is_(True))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )
        for reply in replies:
            replies_by_parent[reply.parent_id].append(reply.to_dict())

    output = []
    for c in comments:
        item = c.to_dict()
        item["replies"] = replies_by_parent[c.id]
        output.append(item)

    return success(count=len(comments), comments=output)


# --- 2. KIRIM KOMENTAR (Public, selalu menunggu approval) ---
@comment_bp.route("", methods=["POST"])
def create_comment():
    """
    POST /api/comments
    Body JSON:
    {
      "blog": 1,
      "name": "Budi",
      "email": "budi@example.com",
      "content": "Artikel yang bagus",
      "parentComment": null
    }
    """
    data = json_body()

    blog_id = data.get("blog")
    name = text_value(data.get("name"))
    email = text_value(data.get("email")).lower()
    content = text_value(data.get("content"))
    parent_id = data.get("parentComment")

    if not blog_id or not name or not email or not content:
        return error("Please provide all required fields", 400)

    validation_errors = Comment.validate_fields(name, email, content)
    if validation_errors:
        return error(validation_errors[0], 400)

    blog_id = _to_int(blog_id)
    if blog_id is None or not db.session.get(Blog, blog_id):
        return error("Blog not found", 404)

    if parent_id:
        parent_id = _to_int(parent_id)
        if parent_id is None or not db.session.get(Comment, parent_id):
            return error("Parent comment not found", 404)
    else:
        parent_id = None

    comment = Comment(
        blog_id=blog_id,
        name=name,
        email=email,
        content=content,
        parent_id=parent_id,
        is_approved=False,
    )
    db.session.add(comment)
    db.session.commit()

    return success(
        "Comment submitted successfully! It will be visible after approval.",
        201,
        comment=comment.to_dict(),
    )


# =========================
# ADMIN
# =========================
@comment_bp.route("", methods=["GET"])
@protect
@authorize(ROLE_ADMIN)
def get_all_comments():
    query = Comment.query

    approved = request.args.get("approved")
    if approved is not None:
        query = query.filter(Comment.is_approved.is_(approved.lower() == "true"))

    comments = query.order_by(Comment.created_at.desc(), Comment.id.desc()).all()
    return success(
        count=len(comments),
        comments=[c.to_dict(with_blog=True) for c in comments],
    )


@comment_bp.route("/stats", methods=["GET"])
@protect
@authorize(ROLE_ADMIN)
def get_comment_stats():
    total = Comment.query.count()
    approved = Comment.query.filter_by(is_approved=True).count()
    pending = Comment.query.filter_by(is_approved=False).count()

    recent = Comment.query.order_by(Comment.created_at.desc(), Comment.id.desc()).limit(5).all()

    return success(
        stats={
            "totalComments": total,
            "approvedComments": approved,
            "pendingComments": pending,
            "recentComments": [c.to_dict(with_blog=True, blog_fields=("id", "title")) for c in recent],
        }
    )


@comment_bp.route("/<int:comment_id>/approve", methods=["PATCH"])
@protect
@authorize(ROLE_ADMIN)
def approve_comment(comment_id):
    comment = db.session.get(Comment, comment_id)
    if not comment:
        return error("Comment not found", 404)

    comment.is_approved = not comment.is_approved
    db.session.commit()

    state = "approved" if comment.is_approved else "unapproved"
    return success(f"Comment {state} successfully", comment=comment.to_dict())


@comment_bp.route("/<int:comment_id>", methods=["DELETE"])
@protect
@authorize(ROLE_ADMIN)
def delete_comment(comment_id):
    comment = db.session.get(Comment, comment_id)
    if not comment:
        return error("Comment not found", 404)

    # Balasan langsung + komentar induk dalam satu transaksi.
    # Balasan dari balasan tidak ikut terhapus.
    try:
        deleted_replies = (
            Comment.query
            .filter_by(parent_id=comment.id)
            .delete(synchronize_session=False)
        )
        db.session.delete(comment)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Cascade delete of comment %s rolled back; comment and replies kept", comment_id)
        return error("Failed to delete comment", 500)

    logger.info("Comment %s deleted with %d repl(ies)", comment_id, deleted_replies)
    return success("Comment deleted successfully")
