"""
Authentication views.

Staff log in with email and password against Django's user table
(passwords are stored hashed) and receive a JWT access/refresh pair.
The access token goes in ``Authorization: Bearer <token>`` on every
protected route.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from records.serializers.auth import LoginSerializer, RefreshSerializer, LogoutSerializer

from .models import User

logger = logging.getLogger(__name__)


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


def user_payload(user: User) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'name': user.get_full_name() or user.username,
    }


# ---------------------------------------------------------------------
# Email/password login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']
    password = s.validated_data['password']

    account = User.objects.filter(email__iexact=email).first()
    user = authenticate(request, username=account.username, password=password) if account else None
    if not user:
        logger.warning('failed login for %s from %s', email, request.META.get('REMOTE_ADDR'))
        return Response({'success': False, 'message': 'Invalid credentials'}, status=401)

    refresh = RefreshToken.for_user(user)
    logger.info('login ok for %s', email)
    return Response({
        'success': True,
        'message': 'Login successful',
        'token': str(refresh.access_token),
        'refresh': str(refresh),
        'user': user_payload(user),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def verify_token_view(request):
    return Response({'user': user_payload(request.user)})


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token."""
    s = RefreshSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = TokenRefreshSerializer(data={'refresh': s.validated_data['refresh']})
    try:
        refresh.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0])
    return Response({'token': refresh.validated_data['access']})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token, or all of the user's tokens."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            raise InvalidToken(e.args[0])
        return Response({'ok': True, 'blacklisted': 1})

    count = 0
    for token in OutstandingToken.objects.filter(user=request.user):
        _, created = BlacklistedToken.objects.get_or_create(token=token)
        count += int(created)
    return Response({'ok': True, 'blacklisted': count})
