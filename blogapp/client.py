"""
Client untuk HTTP API blog: halaman publik (baca + komentar) dan konsol admin.

    client = BlogApiClient("http://localhost:5000")
    client.login("admin@example.com", "admin123")
    client.list_blogs(published="true", page=1)
"""
import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    def __init__(self, status_code: int, message: str, payload: Optional[dict] = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}
        super().__init__(f"HTTP {status_code}: {message}")


class BlogApiClient:
    """Bearer token client; token disimpan setelah login."""

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: int = 30, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        self.token = None
        if token:
            self._set_token(token)

    def _set_token(self, token: Optional[str]):
        self.token = token
        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'
        else:
            self.session.headers.pop('Authorization', None)

    def _request(self, method: str, endpoint: str, **kwargs) -> dict:
        url = f"{self.base_url}/api/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiClientError(0, str(e))

        try:
            body = response.json()
        except ValueError:
            body = {'success': False, 'message': response.text or response.reason}

        if not response.ok or not body.get('success', False):
            raise ApiClientError(response.status_code, body.get('message') or 'Request failed', body)
        return body

    # ===== Auth =====
    def login(self, email: str, password: str) -> dict:
        body = self._request('POST', 'auth/login', json={'email': email, 'password': password})
        self._set_token(body.get('token'))
        return body

    def logout(self) -> dict:
        try:
            return self._request('POST', 'auth/logout')
        finally:
            # Token stateless: cukup dibuang di sisi client
            self._set_token(None)

    def me(self) -> dict:
        return self._request('GET', 'auth/me')

    def update_profile(self, **fields) -> dict:
        return self._request('PUT', 'auth/profile', json=fields)

    def health(self) -> dict:
        return self._request('GET', 'health')

    # ===== Blogs =====
    def list_blogs(self, **params) -> dict:
        return self._request('GET', 'blogs', params=params)

    def get_blog(self, blog_id: int) -> dict:
        return self._request('GET', f'blogs/{blog_id}')

    def get_blog_by_slug(self, slug: str) -> dict:
        return self._request('GET', f'blogs/slug/{slug}')

    def create_blog(self, **fields) -> dict:
        return self._request('POST', 'blogs', json=fields)

    def update_blog(self, blog_id: int, **fields) -> dict:
        return self._request('PUT', f'blogs/{blog_id}', json=fields)

    def delete_blog(self, blog_id: int) -> dict:
        return self._request('DELETE', f'blogs/{blog_id}')

    def toggle_publish(self, blog_id: int) -> dict:
        return self._request('PATCH', f'blogs/{blog_id}/publish')

    def generate_blog(self, topic: str, category: int, tone: Optional[str] = None) -> dict:
        data = {'topic': topic, 'category': category}
        if tone:
            data['tone'] = tone
        return self._request('POST', 'blogs/generate', json=data)

    def improve_blog(self, blog_id: int, instruction: str) -> dict:
        return self._request('POST', f'blogs/{blog_id}/improve', json={'instruction': instruction})

    def blog_ideas(self, category: int, count: Optional[int] = None) -> dict:
        return self._request('POST', 'blogs/ideas', json={'category': category, 'count': count})

    def blog_stats(self) -> dict:
        return self._request('GET', 'blogs/stats/all')

    # ===== Categories =====
    def list_categories(self, active_only: bool = False) -> dict:
        params = {'active': 'true'} if active_only else None
        return self._request('GET', 'categories', params=params)

    def get_category(self, category_id: int) -> dict:
        return self._request('GET', f'categories/{category_id}')

    def create_category(self, **fields) -> dict:
        return self._request('POST', 'categories', json=fields)

    def update_category(self, category_id: int, **fields) -> dict:
        return self._request('PUT', f'categories/{category_id}', json=fields)

    def delete_category(self, category_id: int) -> dict:
        return self._request('DELETE', f'categories/{category_id}')

    # ===== Comments =====
    def blog_comments(self, blog_id: int) -> dict:
        return self._request('GET', f'comments/blog/{blog_id}')

    def submit_comment(self, blog: int, name: str, email: str, content: str,
                       parent_comment: Optional[int] = None) -> dict:
        return self._request('POST', 'comments', json={
            'blog': blog,
            'name': name,
            'email': email,
            'content': content,
            'parentComment': parent_comment,
        })

    def list_comments(self, approved: Optional[bool] = None) -> dict:
        params = None if approved is None else {'approved': 'true' if approved else 'false'}
        return self._request('GET', 'comments', params=params)

    def comment_stats(self) -> dict:
        return self._request('GET', 'comments/stats')

    def toggle_approve(self, comment_id: int) -> dict:
        return self._request('PATCH', f'comments/{comment_id}/approve')

    def delete_comment(self, comment_id: int) -> dict:
        return self._request('DELETE', f'comments/{comment_id}')

    # ===== Users (admin) =====
    def list_users(self) -> dict:
        return self._request('GET', 'users')

    def list_publishers(self) -> dict:
        return self._request('GET', 'users/publishers')

    def get_user(self, user_id: int) -> dict:
        return self._request('GET', f'users/{user_id}')

    def create_user(self, **fields) -> dict:
        return self._request('POST', 'users', json=fields)

    def update_user(self, user_id: int, **fields) -> dict:
        return self._request('PUT', f'users/{user_id}', json=fields)

    def delete_user(self, user_id: int) -> dict:
        return self._request('DELETE', f'users/{user_id}')

    # ===== Upload =====
    def upload_image(self, fileobj, filename: str) -> dict:
        return self._request('POST', 'upload', files={'image': (filename, fileobj)})
