import inject

from src.setup.audit_config import AuditSettings, get_audit_settings
from src.setup.db_config import StoreSettings, get_store_settings
from src.setup.worker_config import WorkerSettings, get_worker_settings
from src.taskbeat.application.queue import TaskQueue
from src.taskbeat.application.services import IntakeService
from src.taskbeat.domain.repositories import AuditRecorder, TaskStore
from src.taskbeat.infrastructure.audit.recorder import FileAuditRecorder
from src.taskbeat.infrastructure.sqlite.store import SqliteTaskStore
from src.taskbeat.worker.worker import TaskWorker


def configure_di(
    *,
    store: TaskStore | None = None,
    audit: AuditRecorder | None = None,
    store_settings: StoreSettings | None = None,
    audit_settings: AuditSettings | None = None,
    worker_settings: WorkerSettings | None = None,
) -> inject.Injector:
    """
    Build the store, audit recorder, queue, worker and intake service and bind them.

    Explicit ``store``/``audit`` instances win over the ones built from settings,
    which lets tests swap in stubs. Any previous configuration is replaced.
    """
    if store is None:
        store_settings = store_settings or get_store_settings()
        store = SqliteTaskStore(store_settings.DB_PATH, table=store_settings.TABLE_NAME)
    if audit is None:
        audit_settings = audit_settings or get_audit_settings()
        audit = FileAuditRecorder(
            audit_settings.AUDIT_LOG_PATH, source_tag=audit_settings.AUDIT_SOURCE_TAG
        )
    worker_settings = worker_settings or get_worker_settings()
    queue = TaskQueue(
        capacity=worker_settings.QUEUE_CAPACITY,
        enqueue_timeout=worker_settings.ENQUEUE_TIMEOUT_SEC,
    )
    intake = IntakeService(store=store, queue=queue)
    worker = TaskWorker(queue=queue, store=store, audit=audit)

    def _config(binder: inject.Binder) -> None:
        binder.bind(TaskStore, store)
        binder.bind(AuditRecorder, audit)
        binder.bind(TaskQueue, queue)
        binder.bind(IntakeService, intake)
        binder.bind(TaskWorker, worker)

    return inject.clear_and_configure(_config)
