# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resdetect processors.

:class:`ResourceEnricher` applies the detected resource to incoming
telemetry resources.
"""

from resdetect.processors.enricher import ResourceEnricher

__all__ = ["ResourceEnricher"]
