# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for tracing and logging setup.
"""

import logging
from unittest.mock import patch

from opentelemetry.sdk.trace import TracerProvider

from sesmt.observability.config import build_sampler, setup_observability


class TestObservabilitySetup:
    """Test environment-driven observability configuration."""

    @patch('sesmt.observability.config.trace.set_tracer_provider')
    def test_disabled_tracing_installs_nothing(self, mock_set_provider, monkeypatch):
        monkeypatch.setenv('OTEL_ENABLED', 'false')

        assert setup_observability() is False
        mock_set_provider.assert_not_called()

    @patch('sesmt.observability.config.trace.set_tracer_provider')
    def test_development_uses_console_exporter(self, mock_set_provider, monkeypatch):
        monkeypatch.setenv('OTEL_ENABLED', 'true')
        monkeypatch.setenv('ENVIRONMENT', 'development')

        assert setup_observability() is True

        provider = mock_set_provider.call_args[0][0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "sesmt-compliance"
        assert logging.getLogger('sesmt.services').level == logging.DEBUG

    @patch('sesmt.observability.config.OTLPSpanExporter')
    @patch('sesmt.observability.config.trace.set_tracer_provider')
    def test_production_exports_to_otlp(self, mock_set_provider, mock_exporter, monkeypatch):
        monkeypatch.setenv('OTEL_ENABLED', 'true')
        monkeypatch.setenv('ENVIRONMENT', 'production')
        monkeypatch.setenv('OTEL_EXPORTER_OTLP_ENDPOINT', 'http://collector:4317')

        assert setup_observability() is True
        mock_exporter.assert_called_once_with(endpoint='http://collector:4317')

    def test_sampling_ratio_per_environment(self):
        assert build_sampler('production').rate == 0.1
        assert build_sampler('staging').rate == 0.5
        assert build_sampler('development').rate == 1.0
