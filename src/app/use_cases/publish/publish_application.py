"""Use case de publicação de um binário no Apperian.

Orquestra, em ordem e sem voltar atrás:
    1. authenticate      → sessão com token
    2. resolve target    → app existente (update) ou intenção de criar
    3. upload binary     → binário + metadados mesclados
    4. publish           → só no protocolo EASE
    5. sign (opcional)   → credencial por descrição + plataforma, polling
    6. enable            → PUT idempotente, estado terminal de sucesso

Qualquer erro é fatal e aborta a execução. `execute()` é o único ponto
que converte a exceção em PublishResult.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain import (
    AppMetadata,
    PublishResult,
    PublishStatus,
    RemoteApplication,
    SigningStatus,
    SigningStatusReport,
    UploadResult,
    UploadTicket,
)
from app.observability import get_correlation_id, record_latency, record_signing_polls
from app.sessions import ApperianSession
from app.use_cases.publish.signing_poll import SleepFn, wait_for_signing
from config.settings import PLACEHOLDER_DEVICE_ID, SIGNING_POLL_INTERVAL_SECONDS
from fsm import WorkflowState, WorkflowStateMachine, create_fsm
from utils.errors import (
    InvalidTransitionError,
    NotFoundError,
    PublishError,
    SigningError,
    WorkflowCancelledError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from app.domain import WorkflowConfig
    from app.protocols.publisher_adapter import PublisherAdapterProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "publish_workflow"


@dataclass
class _WorkflowRun:
    """Estado mutável de uma execução; pertence só ao orquestrador."""

    config: WorkflowConfig
    fsm: WorkflowStateMachine
    cancel_event: asyncio.Event | None
    session: ApperianSession = field(default_factory=ApperianSession)
    application_id: str | None = None


class PublishApplicationUseCase:
    """Orquestra o fluxo de publicação contra um adapter de protocolo."""

    def __init__(
        self,
        adapter: PublisherAdapterProtocol,
        *,
        poll_interval_seconds: float = SIGNING_POLL_INTERVAL_SECONDS,
        default_device_id: str = PLACEHOLDER_DEVICE_ID,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._adapter = adapter
        self._poll_interval = poll_interval_seconds
        self._default_device_id = default_device_id
        self._sleep = sleep

    async def execute(
        self,
        config: WorkflowConfig,
        cancel_event: asyncio.Event | None = None,
    ) -> PublishResult:
        """Executa o fluxo completo e devolve o resultado tagueado."""
        run = _WorkflowRun(
            config=config,
            fsm=create_fsm(get_correlation_id()),
            cancel_event=cancel_event,
        )
        logger.info(
            "publish_workflow_started",
            extra={"protocol": self._adapter.variant, **config.to_log_dict()},
        )

        try:
            await self._run(run)
        except WorkflowCancelledError as exc:
            self._advance(run, WorkflowState.CANCELLED, "cancel")
            logger.warning("publish_workflow_cancelled", extra=run.fsm.get_state_summary())
            return self._result(run, PublishStatus.CANCELLED, exc)
        except PublishError as exc:
            failed_at = run.fsm.current_state.name
            self._advance(run, WorkflowState.FAILED, "fatal_error", error_code=exc.code)
            logger.error(
                "publish_workflow_failed",
                extra={"error_code": exc.code, "error": str(exc), "failed_at": failed_at},
            )
            return self._result(run, PublishStatus.FAILED, exc)

        logger.info(
            "publish_workflow_succeeded",
            extra={"application_id": run.application_id},
        )
        return self._result(run, PublishStatus.SUCCESS)

    async def _run(self, run: _WorkflowRun) -> None:
        await self._authenticate(run)
        target = await self._resolve_target(run)
        ticket, upload, metadata = await self._upload(run, target)
        await self._publish(run, ticket, upload, metadata)
        if run.config.wants_signing:
            await self._sign(run)
        await self._enable(run)

    async def _authenticate(self, run: _WorkflowRun) -> None:
        self._check_cancelled(run)
        config = run.config
        with self._measure("authenticate"):
            await run.session.authenticate(
                self._adapter,
                config.username,
                config.password,
                config.device_id or self._default_device_id,
            )
        self._advance(run, WorkflowState.AUTHENTICATED, "authenticate")

    async def _resolve_target(self, run: _WorkflowRun) -> RemoteApplication | None:
        """Encontra o app pelo bundle id e plataforma (None ao criar)."""
        self._check_cancelled(run)
        config = run.config
        if config.create:
            self._advance(run, WorkflowState.TARGET_RESOLVED, "create_intent")
            return None

        with self._measure("resolve_target"):
            applications = await self._adapter.list_applications(run.session)

        matches = [
            app
            for app in applications
            if app.bundle_id == config.bundle_id
            and self._adapter.matches_platform(app, config.platform)
        ]
        if not matches:
            raise NotFoundError(
                f"Aplicação não encontrada no Apperian: {config.bundle_id} ({config.platform.value})"
            )
        if len(matches) > 1:
            # Sem desempate: vale a ordem devolvida pelo servidor
            logger.warning(
                "multiple_applications_matched",
                extra={
                    "bundle_id": config.bundle_id,
                    "application_ids": [app.application_id for app in matches],
                },
            )

        target = matches[0]
        run.application_id = target.application_id
        self._advance(
            run,
            WorkflowState.TARGET_RESOLVED,
            "resolve_target",
            application_id=target.application_id,
        )
        return target

    async def _upload(
        self,
        run: _WorkflowRun,
        target: RemoteApplication | None,
    ) -> tuple[UploadTicket, UploadResult, AppMetadata]:
        self._check_cancelled(run)
        with self._measure("upload"):
            ticket = await self._adapter.open_upload(run.session, target)
            metadata = ticket.server_metadata.merged_with(run.config.metadata)
            upload = await self._adapter.upload_binary(
                run.session,
                ticket,
                run.config.file_path,
                metadata,
            )

        if upload.application_id:
            run.application_id = upload.application_id
        self._advance(
            run,
            WorkflowState.UPLOADED,
            "upload",
            file_id=upload.file_id,
            application_id=run.application_id,
        )
        logger.info("binary_uploaded", extra={"file_id": upload.file_id})
        return ticket, upload, metadata

    async def _publish(
        self,
        run: _WorkflowRun,
        ticket: UploadTicket,
        upload: UploadResult,
        metadata: AppMetadata,
    ) -> None:
        if not self._adapter.requires_publish:
            return
        self._check_cancelled(run)
        with self._measure("publish"):
            run.application_id = await self._adapter.publish(run.session, ticket, upload, metadata)
        self._advance(
            run,
            WorkflowState.PUBLISHED,
            "publish",
            application_id=run.application_id,
        )

    async def _sign(self, run: _WorkflowRun) -> None:
        """Solicita a assinatura e aguarda um status terminal."""
        self._check_cancelled(run)
        config = run.config
        application_id = self._require_application_id(run)

        credentials = await self._adapter.list_signing_credentials(run.session)
        platform_code = config.platform.signing_platform_code
        credential = next(
            (
                item
                for item in credentials
                if platform_code is not None
                and item.description == config.signing_credential
                and item.platform == platform_code
            ),
            None,
        )
        if credential is None:
            raise NotFoundError(
                f"Credencial não encontrada no Apperian: {config.signing_credential}"
            )

        report = await self._adapter.enable_signing(run.session, application_id, credential.psk)
        self._advance(
            run,
            WorkflowState.SIGNING,
            "enable_signing",
            signing_status=_status_name(report),
        )

        if report.status is SigningStatus.ERROR:
            raise SigningError(f"Erro ao assinar aplicação: {report.detail}", detail=report.detail)
        if report.status is not SigningStatus.IN_PROGRESS:
            return

        def on_poll(poll_report: SigningStatusReport, attempt: int) -> None:
            self._advance(
                run,
                WorkflowState.SIGNING,
                "signing_poll",
                attempt=attempt,
                signing_status=_status_name(poll_report),
            )

        with self._measure("signing_poll"):
            _, polls = await wait_for_signing(
                self._adapter,
                run.session,
                application_id,
                interval_seconds=self._poll_interval,
                cancel_event=run.cancel_event,
                sleep=self._sleep,
                on_poll=on_poll,
            )
        record_signing_polls(polls, SigningStatus.SIGNED.value, get_correlation_id())

    async def _enable(self, run: _WorkflowRun) -> None:
        self._check_cancelled(run)
        application_id = self._require_application_id(run)
        with self._measure("enable"):
            response = await self._adapter.enable_application(run.session, application_id)
        # Resposta apenas logada, sem validação adicional
        logger.info(
            "application_enabled",
            extra={"application_id": application_id, "enable_response": response},
        )
        self._advance(run, WorkflowState.ENABLED, "enable", application_id=application_id)

    @staticmethod
    def _require_application_id(run: _WorkflowRun) -> str:
        if not run.application_id:
            raise NotFoundError("Identificador da aplicação ausente após o upload")
        return run.application_id

    @staticmethod
    def _check_cancelled(run: _WorkflowRun) -> None:
        if run.cancel_event is not None and run.cancel_event.is_set():
            raise WorkflowCancelledError(
                f"Execução cancelada em {run.fsm.current_state.name}"
            )

    @staticmethod
    def _advance(
        run: _WorkflowRun,
        target: WorkflowState,
        trigger: str,
        **metadata: Any,
    ) -> None:
        result = run.fsm.transition(target, trigger, metadata=metadata)
        if not result.success:
            raise InvalidTransitionError(result.error_reason)

    @staticmethod
    @contextmanager
    def _measure(step: str) -> Iterator[None]:
        start = time.perf_counter()
        yield
        record_latency(_COMPONENT, step, (time.perf_counter() - start) * 1000, get_correlation_id())

    @staticmethod
    def _result(
        run: _WorkflowRun,
        status: PublishStatus,
        error: PublishError | None = None,
    ) -> PublishResult:
        return PublishResult(
            status=status,
            application_id=run.application_id,
            error_code=error.code if error else None,
            error_message=str(error) if error else None,
            history=run.fsm.get_history_summary(),
        )


def _status_name(report: SigningStatusReport) -> str | None:
    return report.status.value if report.status else None
