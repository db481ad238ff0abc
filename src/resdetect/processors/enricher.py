# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""ResourceEnricher - stamp the detected resource onto telemetry resources.

Each incoming resource (of a span batch, a metric batch, ...) receives the
detected attributes.  With ``override`` (default) detected values replace
what the incoming resource already carries; without it, incoming values win
and only missing keys are added.  Schema URLs follow
:func:`~resdetect.sdk.merge.merge_schema_url`, the incoming URL first.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from resdetect.models.resource import Resource
from resdetect.sdk.merge import merge_resource, merge_schema_url

if TYPE_CHECKING:
    from opentelemetry.sdk.resources import Resource as OTelResource

    from resdetect.sdk.context import DetectContext
    from resdetect.sdk.provider import ResourceProvider

logger = logging.getLogger(__name__)


class ResourceEnricher:
    """Merges the provider's detected resource into other resources."""

    def __init__(self, provider: ResourceProvider, override: bool = True) -> None:
        self._provider = provider
        self._override = override
        self._detected: Optional[Resource] = None

    @property
    def override(self) -> bool:
        return self._override

    def start(self, ctx: Optional[DetectContext] = None) -> None:
        """Run detection now instead of on the first enriched resource."""
        self._detected = self._detection(ctx)

    def _detection(self, ctx: Optional[DetectContext] = None) -> Resource:
        if self._detected is None:
            result = self._provider.get(ctx)
            if result.error is not None:
                logger.warning("Resource detection failed, enriching with an empty resource: %s", result.error)
            self._detected = result.resource
        return self._detected

    def enrich(self, target: Resource) -> Resource:
        """Merge the detected resource into *target* in place and return it."""
        detected = self._detection()
        target.schema_url = merge_schema_url(target.schema_url, detected.schema_url)
        merge_resource(target, detected, override_existing=self._override)
        return target

    def enrich_otel(self, target: OTelResource) -> OTelResource:
        """Return a new OTel SDK resource: *target* enriched with the detected one."""
        return self.enrich(Resource.from_otel(target)).to_otel()


__all__ = ["ResourceEnricher"]
