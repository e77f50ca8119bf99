"""OpenTelemetry 계측 설정

FastAPI 앱에서 사용하는 OTel 초기화 로직과 MiddleGround 전용 메트릭을 제공합니다.
telemetry_enabled가 꺼져 있으면 메트릭 기록은 모두 no-op 입니다.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.semconv.resource import ResourceAttributes

from app.core.config import get_settings

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


def init_telemetry(
    service_name: str,
    service_version: str = "0.1.0",
    otlp_endpoint: str | None = None,
) -> tuple[trace.Tracer, metrics.Meter]:
    """OpenTelemetry 초기화

    Args:
        service_name: 서비스 이름 (예: "middleground-backend")
        service_version: 서비스 버전
        otlp_endpoint: OTLP 수신 엔드포인트 (기본값: 설정의 otel_exporter_otlp_endpoint)

    Returns:
        (Tracer, Meter) 튜플
    """
    settings = get_settings()
    endpoint = otlp_endpoint or settings.otel_exporter_otlp_endpoint

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: service_name,
            ResourceAttributes.SERVICE_VERSION: service_version,
            ResourceAttributes.DEPLOYMENT_ENVIRONMENT: settings.app_env,
        }
    )

    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint, insecure=True),
        export_interval_millis=10000,  # 10초마다 export
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(meter_provider)

    tracer = trace.get_tracer(service_name, service_version)
    meter = metrics.get_meter(service_name, service_version)

    logger.info(
        "Telemetry initialized: service=%s, endpoint=%s",
        service_name,
        endpoint,
    )

    return tracer, meter


def instrument_fastapi(app: FastAPI) -> None:
    """FastAPI 자동 계측"""
    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumentation enabled")
    except Exception as e:
        logger.warning("Failed to instrument FastAPI: %s", e)


def instrument_common(engine: AsyncEngine | None = None) -> None:
    """httpx / SQLAlchemy 자동 계측"""
    try:
        from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

        HTTPXClientInstrumentor().instrument()
        logger.info("HTTPX instrumentation enabled")
    except Exception as e:
        logger.warning("Failed to instrument HTTPX: %s", e)

    if engine is None:
        return
    try:
        from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor

        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
        logger.info("SQLAlchemy instrumentation enabled")
    except Exception as e:
        logger.warning("Failed to instrument SQLAlchemy: %s", e)


# ===========================================
# MiddleGround 전용 메트릭
# ===========================================


class MeetupMetrics:
    """회의 조율 커스텀 메트릭"""

    def __init__(self, meter: metrics.Meter):
        self.meter = meter
        self.meetings_created = self.meter.create_counter(
            name="middleground_meetings_created_total",
            description="생성된 회의 수",
        )
        self.locations_submitted = self.meter.create_counter(
            name="middleground_locations_submitted_total",
            description="제출된 위치 수 (덮어쓰기 포함)",
        )
        self.meetings_finalized = self.meter.create_counter(
            name="middleground_meetings_finalized_total",
            description="확정된 회의 수",
        )
        self.venue_search_duration = self.meter.create_histogram(
            name="middleground_venue_search_duration_seconds",
            description="장소 검색 API 응답 시간",
            unit="s",
        )
        self.notifications = self.meter.create_counter(
            name="middleground_notifications_total",
            description="이메일 알림 결과 (sent/failed)",
        )


# ===========================================
# 싱글톤 인스턴스 및 접근자
# ===========================================

_tracer: trace.Tracer | None = None
_meter: metrics.Meter | None = None
_meetup_metrics: MeetupMetrics | None = None
_initialized: bool = False


def get_meetup_metrics() -> MeetupMetrics | None:
    """메트릭 인스턴스 반환 (초기화 안 된 경우 None)"""
    return _meetup_metrics


def setup_telemetry(
    service_name: str,
    service_version: str = "0.1.0",
    engine: AsyncEngine | None = None,
) -> None:
    """전역 telemetry 설정 (애플리케이션 시작 시 호출)"""
    global _tracer, _meter, _meetup_metrics, _initialized

    if _initialized:
        logger.warning("Telemetry already initialized, skipping")
        return

    _tracer, _meter = init_telemetry(service_name, service_version)
    _meetup_metrics = MeetupMetrics(_meter)
    instrument_common(engine)
    _initialized = True


def record_counter(name: str, amount: int = 1, attributes: dict[str, str] | None = None) -> None:
    """MeetupMetrics의 counter에 값 추가 (미초기화 시 무시)"""
    meetup_metrics = get_meetup_metrics()
    if meetup_metrics is None:
        return
    getattr(meetup_metrics, name).add(amount, attributes or {})


@contextmanager
def timed_operation(histogram_name: str, attributes: dict[str, str] | None = None):
    """시간 측정 컨텍스트 매니저

    Usage:
        with timed_operation("venue_search_duration") as timer:
            ...
        # timer.duration에 경과 시간 저장, 초기화된 경우 histogram에 기록
    """

    class Timer:
        def __init__(self):
            self.start_time = time.perf_counter()
            self.duration: float = 0.0

    timer = Timer()
    try:
        yield timer
    finally:
        timer.duration = time.perf_counter() - timer.start_time
        meetup_metrics = get_meetup_metrics()
        if meetup_metrics is not None:
            getattr(meetup_metrics, histogram_name).record(timer.duration, attributes or {})
