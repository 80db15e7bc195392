"""Tests for the Flask-JWT-Extended signer adapter."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import decode_token
from groupware.infra.jwt.flask_jwt_token_signer import FlaskJWTTokenSigner


def test_sign_issues_refresh_token_with_role_claim(app):
    signer = FlaskJWTTokenSigner()

    with app.app_context():
        token = signer.sign("ana@example.com", "ROLE_ADMIN", timedelta(days=7))
        claims = decode_token(token)

    assert claims["sub"] == "ana@example.com"
    assert claims["role"] == "ROLE_ADMIN"
    assert claims["type"] == "refresh"
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_each_token_is_unique(app):
    signer = FlaskJWTTokenSigner()

    with app.app_context():
        first = signer.sign("ana@example.com", "ROLE_USER", timedelta(minutes=5))
        second = signer.sign("ana@example.com", "ROLE_USER", timedelta(minutes=5))

    assert first != second


def test_custom_role_claim(app):
    signer = FlaskJWTTokenSigner(role_claim="authority")

    with app.app_context():
        claims = decode_token(signer.sign("ana@example.com", "ROLE_USER", timedelta(minutes=5)))

    assert claims["authority"] == "ROLE_USER"
    assert "role" not in claims
