"""Tests for gateway wiring and the startup upstream check."""

from __future__ import annotations

import logging

from homebridge_openclaw.client.auth import AuthMode
from homebridge_openclaw.client.errors import UpstreamAuthError
from homebridge_openclaw.config.models import GatewayConfig
from homebridge_openclaw.config.token import CredentialSource, derive_token
from homebridge_openclaw.server.gateway import build_gateway, verify_upstream


class TestBuildGateway:
    def test_from_storage(self, storage, secrets):
        gateway = build_gateway(GatewayConfig(storage_path=storage, name="Agent Bridge"))
        try:
            assert gateway.bridge.mode is AuthMode.DIRECT_SIGN
            assert gateway.api_token.source is CredentialSource.AUTO
            assert gateway.api_token.value == derive_token(secrets.secret_key)
            assert (storage / ".openclaw-token").read_text().strip() == gateway.api_token.value
            assert gateway.self_name == "Agent Bridge"
            assert gateway.dispatcher.writer is gateway.bridge
        finally:
            gateway.close()

    def test_declared_token(self, storage):
        gateway = build_gateway(GatewayConfig(storage_path=storage, token="declared-token"))
        try:
            assert gateway.api_token.source is CredentialSource.CONFIG
        finally:
            gateway.close()

    def test_login_mode_without_secrets(self, empty_storage):
        config = GatewayConfig(
            storage_path=empty_storage, homebridge_ui_user="admin", homebridge_ui_pass="pw",
        )
        gateway = build_gateway(config)
        try:
            assert gateway.bridge.mode is AuthMode.CREDENTIAL_LOGIN
        finally:
            gateway.close()


class TestVerifyUpstream:
    def test_success(self, gateway, caplog):
        with caplog.at_level(logging.INFO):
            assert verify_upstream(gateway) is True
        gateway.bridge.get_credential.assert_called_once()

    def test_failure_is_logged_not_raised(self, gateway, caplog):
        gateway.bridge.get_credential.side_effect = UpstreamAuthError(401, "Unauthorized")
        with caplog.at_level(logging.ERROR):
            assert verify_upstream(gateway) is False
        assert "Config UI login failed (401)" in caplog.text

    def test_list_devices_uses_self_name(self, gateway):
        gateway.self_name = "Kitchen Light"
        assert [d.id for d in gateway.list_devices()] == ["thermo-1", "self-1"]
