# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Resource provider - run detectors once, merge, filter, memoize.

:class:`ResourceProviderFactory` holds the registry of detector factories and
builds a :class:`ResourceProvider` for an ordered list of detector types.
Construction is fail-fast: an unknown type or a failing factory aborts it.

:meth:`ResourceProvider.get` performs detection exactly once per provider
instance, however many threads call it:

1. The first caller runs every detector sequentially, in configured order,
   under a context bounded by the timeout.  A failing or timed-out detector
   is logged as a warning and skipped.
2. Each successful result is merged first-write-wins, so earlier detectors
   take precedence; schema URLs follow :func:`merge_schema_url`.
3. The merged attributes are filtered to the allow-list, once.
4. The result is memoized; every caller, concurrent or later, receives a
   copy of it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING, AbstractSet, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from resdetect.errors import ConfigError, DetectorConstructionError, DetectorRuntimeError, UnknownDetectorTypeError
from resdetect.models.resource import Resource
from resdetect.resources.base import (
    CreateSettings,
    Detector,
    DetectorFactory,
    DetectorType,
    ResourceDetectorConfig,
)
from resdetect.sdk.config import DEFAULT_TIMEOUT
from resdetect.sdk.context import DetectContext
from resdetect.sdk.merge import filter_attributes, merge_resource, merge_schema_url
from resdetect.sdk.once import OnceResult

if TYPE_CHECKING:
    from opentelemetry.sdk.resources import Resource as OTelResource


class DetectionResult(NamedTuple):
    """Outcome of :meth:`ResourceProvider.get`.

    ``error`` is ``None`` unless the detection pass itself failed; individual
    detector failures are only logged.
    """

    resource: Resource
    schema_url: str
    error: Optional[BaseException]


class ResourceProviderFactory:
    """Registry of detector factories keyed by detector type.

    Example::

        >>> factory = ResourceProviderFactory({"env": create_env_detector})
        >>> provider = factory.create_resource_provider(
        ...     CreateSettings(), 5.0, [], config, "env",
        ... )
    """

    def __init__(self, detectors: Mapping[DetectorType, DetectorFactory]) -> None:
        self._detectors = dict(detectors)

    @property
    def detector_types(self) -> List[DetectorType]:
        return list(self._detectors)

    def create_resource_provider(
        self,
        settings: CreateSettings,
        timeout: Optional[float],
        attributes: Iterable[str],
        detector_configs: ResourceDetectorConfig,
        *detector_types: DetectorType,
    ) -> ResourceProvider:
        """Build the detectors for *detector_types* and wrap them in a provider.

        Args:
            settings: Passed to every detector factory; ``settings.logger``
                becomes the provider's logger.
            timeout: Seconds allowed for the whole detection pass.
            attributes: Allow-list of attribute keys; empty keeps all.
            detector_configs: Resolves each detector type's configuration.
            detector_types: Detectors to run, in precedence order.

        Raises:
            UnknownDetectorTypeError: A type has no registered factory.
            DetectorConstructionError: A factory raised.
        """
        detectors = self.get_detectors(settings, detector_configs, detector_types)
        attributes_to_keep = frozenset(attributes or ())
        return ResourceProvider(settings.logger, timeout, attributes_to_keep, *detectors)

    def get_detectors(
        self,
        settings: CreateSettings,
        detector_configs: ResourceDetectorConfig,
        detector_types: Iterable[DetectorType],
    ) -> List[Detector]:
        detectors: List[Detector] = []
        for detector_type in detector_types:
            factory = self._detectors.get(detector_type)
            if factory is None:
                raise UnknownDetectorTypeError(detector_type)

            try:
                detector = factory(settings, detector_configs.get_config_from_type(detector_type))
            except Exception as exc:
                raise DetectorConstructionError(detector_type, exc) from exc

            settings.logger.debug("Created detector %s for type %s", type(detector).__name__, detector_type)
            detectors.append(detector)
        return detectors


class ResourceProvider:
    """Detects the resource once and hands out copies of the result."""

    def __init__(
        self,
        logger: Optional[logging.Logger],
        timeout: Optional[float],
        attributes_to_keep: AbstractSet[str],
        *detectors: Detector,
    ) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        if timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {timeout}")
        self.timeout: float = timeout
        self.attributes_to_keep: FrozenSet[str] = frozenset(attributes_to_keep)
        self._detectors: Tuple[Detector, ...] = tuple(detectors)
        self._once: OnceResult[Tuple[Resource, str]] = OnceResult()

    @property
    def detectors(self) -> Tuple[Detector, ...]:
        return self._detectors

    @property
    def detected(self) -> bool:
        """Whether the detection pass has completed."""
        return self._once.done

    def get(self, ctx: Optional[DetectContext] = None, timeout: Optional[float] = None) -> DetectionResult:
        """Return the detected resource, running detection on first use.

        Args:
            ctx: Parent context; cancelling it cancels in-flight detection.
            timeout: Seconds allowed for detection, overriding the provider
                timeout.  Only the call that performs detection uses it.
        """
        parent = ctx or DetectContext.background()

        def _compute() -> Tuple[Resource, str]:
            detect_ctx = parent.with_timeout(self.timeout if timeout is None else timeout)
            try:
                return self._detect_resource(detect_ctx)
            except Exception as exc:
                self._logger.error("resource detection failed: %s", exc, exc_info=True)
                raise
            finally:
                detect_ctx.cancel()

        value, error = self._once.do(_compute)
        if error is not None or value is None:
            return DetectionResult(Resource(), "", error)

        resource, schema_url = value
        return DetectionResult(resource.copy(), schema_url, None)

    def get_otel_resource(
        self, ctx: Optional[DetectContext] = None, timeout: Optional[float] = None
    ) -> OTelResource:
        """:meth:`get` converted to an ``opentelemetry.sdk.resources.Resource``."""
        return self.get(ctx, timeout).resource.to_otel()

    def _detect_resource(self, ctx: DetectContext) -> Tuple[Resource, str]:
        res = Resource()
        merged_schema_url = ""

        self._logger.info("began detecting resource information")

        executor = ThreadPoolExecutor(
            max_workers=max(1, len(self._detectors)),
            thread_name_prefix="resdetect",
        )
        try:
            for detector in self._detectors:
                try:
                    detected, schema_url = self._run_detector(executor, detector, ctx)
                except DetectorRuntimeError as err:
                    self._logger.warning("failed to detect resource: %s", err)
                    continue
                merged_schema_url = merge_schema_url(merged_schema_url, schema_url)
                merge_resource(res, detected, override_existing=False)
        finally:
            # a detector ignoring cancellation may still be running
            executor.shutdown(wait=False)

        dropped = filter_attributes(res.attributes, self.attributes_to_keep)

        self._logger.info("detected resource information: %s", res.to_dict())
        if dropped:
            self._logger.info("dropped resource information: %s", dropped)

        res.schema_url = merged_schema_url
        return res, merged_schema_url

    def _run_detector(
        self, executor: ThreadPoolExecutor, detector: Detector, ctx: DetectContext
    ) -> Tuple[Resource, str]:
        """Run one detector, waiting no longer than the context allows.

        Raises:
            DetectorRuntimeError: The detector raised, returned something
                other than ``(Resource, str)``, or outlived the context.
        """
        name = detector.name
        err = ctx.error()
        if err is not None:
            raise DetectorRuntimeError(name, err)

        future = executor.submit(detector.detect, ctx)
        try:
            result = future.result(timeout=ctx.remaining())
        except FutureTimeoutError as exc:
            raise DetectorRuntimeError(name, ctx.error() or exc) from exc
        except DetectorRuntimeError:
            raise
        except Exception as exc:
            raise DetectorRuntimeError(name, exc) from exc

        try:
            detected, schema_url = result
        except (TypeError, ValueError) as exc:
            raise DetectorRuntimeError(name, TypeError(f"unexpected detect() result: {result!r}")) from exc
        if not isinstance(detected, Resource):
            raise DetectorRuntimeError(name, TypeError(f"detect() returned {type(detected).__name__}, not Resource"))
        return detected, schema_url or ""


__all__ = ["DetectionResult", "ResourceProvider", "ResourceProviderFactory"]
