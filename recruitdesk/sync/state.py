"""
Dashboard state container.

Holds the latest pushed snapshot of each collection plus the pipeline's
selected job. Local optimistic edits are applied straight to the snapshot and
are overwritten by the next snapshot the realtime layer pushes.
"""

from typing import Any, Callable, Iterable, Optional, TypeVar, Union

from pydantic import ValidationError

from recruitdesk.auth.session import SessionStore
from recruitdesk.data.models import (
    Application,
    BaseDocument,
    Candidate,
    Category,
    Client,
    Job,
    Pipeline,
    Tag,
    User,
)
from recruitdesk.sync.realtime import RealtimeSync, Snapshot, Subscription
from recruitdesk.utils.config import get_settings
from recruitdesk.utils.constants import Collection
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseDocument)
Listener = Callable[[str], None]


class DashboardState:
    """Per-session snapshots and UI selection, passed explicitly to whoever needs them."""

    def __init__(self, session: Optional[SessionStore] = None) -> None:
        self._snapshots: dict[str, Snapshot] = {}
        self._listeners: list[Listener] = []
        self._session = session
        self._selected_job_id = session.selected_job_id if session else None

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def apply_snapshot(self, collection: str, documents: Iterable[dict[str, Any]]) -> None:
        """Replace a collection's snapshot with the pushed result set."""
        self._snapshots[collection] = list(documents)
        self._notify(collection)

    def snapshot(self, collection: str) -> Snapshot:
        return list(self._snapshots.get(collection, []))

    def has_snapshot(self, collection: str) -> bool:
        return collection in self._snapshots

    def get(self, collection: str, document_id: str) -> Optional[dict[str, Any]]:
        for document in self._snapshots.get(collection, []):
            if document.get("id") == document_id:
                return document
        return None

    def upsert_local(self, collection: str, document: Union[dict[str, Any], BaseDocument]) -> None:
        """Apply an optimistic insert or update ahead of the next snapshot."""
        if isinstance(document, BaseDocument):
            document = document.model_dump()
        if not document.get("id"):
            raise ValueError("Local upsert requires a document id")

        documents = self._snapshots.setdefault(collection, [])
        for index, existing in enumerate(documents):
            if existing.get("id") == document["id"]:
                documents[index] = {**existing, **document}
                break
        else:
            documents.insert(0, document)
        self._notify(collection)

    def remove_local(self, collection: str, document_id: str) -> bool:
        """Apply an optimistic delete; False if the id was not present."""
        documents = self._snapshots.get(collection, [])
        kept = [d for d in documents if d.get("id") != document_id]
        if len(kept) == len(documents):
            return False
        self._snapshots[collection] = kept
        self._notify(collection)
        return True

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self, collection: str) -> None:
        for listener in list(self._listeners):
            listener(collection)

    # -------------------------------------------------------------------------
    # Typed Accessors
    # -------------------------------------------------------------------------

    def models(self, collection: str, model: type[M]) -> list[M]:
        """Parse a snapshot into models; documents that fail validation are skipped."""
        parsed: list[M] = []
        for document in self._snapshots.get(collection, []):
            try:
                parsed.append(model.model_validate(document))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {collection} document {document.get('id')}: {e}")
        return parsed

    @property
    def clients(self) -> list[Client]:
        return self.models(Collection.CLIENTS.value, Client)

    @property
    def jobs(self) -> list[Job]:
        return self.models(Collection.JOBS.value, Job)

    @property
    def candidates(self) -> list[Candidate]:
        return self.models(Collection.CANDIDATES.value, Candidate)

    @property
    def applications(self) -> list[Application]:
        return self.models(Collection.APPLICATIONS.value, Application)

    @property
    def users(self) -> list[User]:
        return self.models(Collection.USERS.value, User)

    @property
    def pipelines(self) -> list[Pipeline]:
        return self.models(Collection.PIPELINES.value, Pipeline)

    @property
    def categories(self) -> list[Category]:
        return self.models(Collection.CATEGORIES.value, Category)

    @property
    def tags(self) -> list[Tag]:
        return self.models(Collection.TAGS.value, Tag)

    # -------------------------------------------------------------------------
    # Pipeline Selection
    # -------------------------------------------------------------------------

    @property
    def selected_job_id(self) -> Optional[str]:
        return self._selected_job_id

    @property
    def selected_job(self) -> Optional[Job]:
        if not self._selected_job_id:
            return None
        return next((j for j in self.jobs if j.id == self._selected_job_id), None)

    def select_job(self, job_id: Optional[str]) -> None:
        """Select the pipeline job, persisting the choice when a session store is attached."""
        self._selected_job_id = job_id
        if self._session is not None:
            if job_id:
                self._session.save_job_selection(job_id)
            else:
                self._session.clear_job_selection()


def bind_realtime(
    sync: RealtimeSync,
    state: DashboardState,
    collections: Optional[Iterable[str]] = None,
) -> list[Subscription]:
    """Feed each collection's live snapshots into ``state``."""
    names = list(collections) if collections is not None else get_settings().sync.collections
    subscriptions = []
    for name in names:

        def _apply(snapshot: Snapshot, name: str = name) -> None:
            state.apply_snapshot(name, snapshot)

        subscriptions.append(sync.subscribe(name, _apply))
    return subscriptions
