"""
URL mappings for the records API.

Paths mirror the ones the front-end calls; trailing slashes are
deliberately omitted.  Each record kind gets a collection and a detail
route bound to the shared views.
"""
from django.urls import path, include

from .auth_views import login_view, verify_token_view, jwt_refresh_view, jwt_logout_view
from .kinds import KINDS
from .views import files, health, stats

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('health', health.health, name='health'),
    # Authentication
    path('api/login', login_view, name='login'),
    path('api/verify-token', verify_token_view, name='verify-token'),
    path('api/auth/refresh', jwt_refresh_view, name='token-refresh'),
    path('api/auth/logout', jwt_logout_view, name='logout'),
    # Stats
    path('api/stats', stats.stats, name='stats'),
    path('api/stats/<str:kind>', stats.kind_stats, name='kind-stats'),
]

# Record files: /api/personal, /api/personal/<id>, ...
for kind in KINDS:
    urlpatterns += [
        path(f'api/{kind}', files.file_collection, {'kind': kind}, name=f'{kind}-list'),
        path(f'api/{kind}/<str:file_id>', files.file_detail, {'kind': kind}, name=f'{kind}-detail'),
    ]
