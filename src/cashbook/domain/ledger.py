"""Ledger controller: the single entry point for mutating the cash journal."""

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import date as date_type
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from cashbook.domain.aggregation import aggregate
from cashbook.domain.entities import (
    AMOUNT_FIELDS,
    AccountingCategory,
    AppSettings,
    CashEntry,
    EntryDraft,
    NetBalance,
)
from cashbook.domain.errors import (
    ExportError,
    LedgerBusyError,
    PersistenceError,
    ValidationError,
    export_failed,
    invalid_entry_date,
    journal_not_saved,
    ledger_busy,
    negative_amount,
    statement_required,
)
from cashbook.domain.export import ExportAdapter, LedgerView
from cashbook.domain.filtering import filter_entries

if TYPE_CHECKING:
    from cashbook.database.stores import EntryStore

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class LedgerState(str, Enum):
    """States of the controller's compose/export state machine."""

    IDLE = "idle"
    COMPOSING = "composing"
    EXPORTING = "exporting"


@dataclass
class ComposeSession:
    """The single add or edit session in progress."""

    draft: EntryDraft
    editing_id: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


@dataclass(frozen=True)
class DeleteRequest:
    """Pending confirmation for deleting one entry."""

    token: str
    entry_id: str


def _new_entry_id() -> str:
    return uuid.uuid4().hex


def _validated_amount(field_name: str, value) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Amount '{field_name}' is not a number: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Amount '{field_name}' is not a number: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Amount '{field_name}' is not a number: {value!r}")
    if amount < 0:
        raise ValidationError(negative_amount(field_name, amount))
    return amount


def validate_draft(draft: EntryDraft) -> EntryDraft:
    """Check a draft and return a normalized copy.

    Raises:
        ValidationError: If the statement is empty, the date is not
            YYYY-MM-DD, or an amount is negative or not a number
    """
    if not draft.statement or not draft.statement.strip():
        raise ValidationError(statement_required())

    if not isinstance(draft.date, str) or not ISO_DATE_PATTERN.match(draft.date):
        raise ValidationError(invalid_entry_date(str(draft.date)))
    try:
        date_type.fromisoformat(draft.date)
    except ValueError:
        raise ValidationError(invalid_entry_date(draft.date))

    normalized = draft.copy()
    for field_name in AMOUNT_FIELDS:
        setattr(normalized, field_name, _validated_amount(field_name, getattr(draft, field_name)))
    return normalized


class LedgerController:
    """Orchestrates entry lifecycle over an EntryStore.

    The controller owns the in-memory collection (newest entry first) and
    persists it after every mutation. At most one add/edit session is active
    at a time, and while an export is running every mutation is refused with
    LedgerBusyError.
    """

    def __init__(
        self,
        entry_store: "EntryStore",
        export_adapter: Optional[ExportAdapter] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """Initialize controller and load the collection.

        Args:
            entry_store: Store the collection is loaded from and saved to
            export_adapter: Optional adapter used by export_view
            id_factory: Optional callable generating new entry ids
        """
        self.entry_store = entry_store
        self.export_adapter = export_adapter
        self._id_factory = id_factory or _new_entry_id
        self._entries: list[CashEntry] = entry_store.load()
        self._state = LedgerState.IDLE
        self._session: Optional[ComposeSession] = None
        # entry id -> token of its pending delete request
        self._pending_deletes: dict[str, str] = {}

    # State

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def session(self) -> Optional[ComposeSession]:
        return self._session

    @property
    def busy(self) -> bool:
        """True while an export is in flight."""
        return self._state == LedgerState.EXPORTING

    @property
    def entries(self) -> tuple[CashEntry, ...]:
        """Snapshot of the collection, newest first."""
        return tuple(self._entries)

    def get_entry(self, entry_id: str) -> Optional[CashEntry]:
        """Get entry by ID, or None if not found."""
        index = self._index_of(entry_id)
        if index is None:
            return None
        return self._entries[index]

    def _index_of(self, entry_id: str) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def _ensure_not_busy(self) -> None:
        if self.busy:
            raise LedgerBusyError(ledger_busy())

    def _commit(self, entries: list[CashEntry]) -> bool:
        # The in-memory view only changes once the store has accepted the write
        try:
            self.entry_store.save(entries)
        except PersistenceError:
            logger.exception(journal_not_saved())
            return False
        self._entries = entries
        return True

    def _end_session(self) -> None:
        self._session = None
        self._state = LedgerState.IDLE

    def _generate_id(self) -> str:
        existing = {entry.id for entry in self._entries}
        entry_id = self._id_factory()
        while entry_id in existing:
            entry_id = self._id_factory()
        return entry_id

    # Compose session

    def start_add(self) -> EntryDraft:
        """Begin composing a new entry, discarding any draft in progress.

        Returns:
            The session's draft, to be filled in before submit()
        """
        self._ensure_not_busy()
        if self._session is not None:
            logger.debug("Discarding draft (editing_id=%s)", self._session.editing_id)
        self._session = ComposeSession(draft=EntryDraft())
        self._state = LedgerState.COMPOSING
        return self._session.draft

    def start_edit(self, entry_id: str) -> Optional[EntryDraft]:
        """Begin editing an entry, discarding any draft in progress.

        Returns:
            Draft pre-filled with the entry's fields, or None if the entry
            does not exist (the current session is then left untouched)
        """
        self._ensure_not_busy()
        entry = self.get_entry(entry_id)
        if entry is None:
            logger.debug("Cannot edit missing entry %s", entry_id)
            return None
        if self._session is not None:
            logger.debug("Discarding draft (editing_id=%s)", self._session.editing_id)
        self._session = ComposeSession(draft=EntryDraft.from_entry(entry), editing_id=entry_id)
        self._state = LedgerState.COMPOSING
        return self._session.draft

    def cancel(self) -> None:
        """Abandon the current add/edit session."""
        self._ensure_not_busy()
        if self._session is None:
            return
        self._end_session()

    def submit(self) -> Optional[CashEntry]:
        """Commit the current session as an add or an edit.

        Returns:
            The stored entry, or None if there is no session, the entry
            being edited no longer exists, or the journal could not be saved

        Raises:
            ValidationError: If the session's draft is invalid
            LedgerBusyError: If an export is in flight
        """
        self._ensure_not_busy()
        if self._session is None:
            return None
        if self._session.is_editing:
            return self.edit(self._session.editing_id, self._session.draft)
        return self.add(self._session.draft)

    # Mutations

    def add(self, draft: EntryDraft) -> Optional[CashEntry]:
        """Create an entry from a draft and prepend it to the collection.

        Returns:
            The new entry, or None if the journal could not be saved (the
            collection and any compose session are then left as they were)

        Raises:
            ValidationError: If the draft is invalid; nothing is changed
            LedgerBusyError: If an export is in flight
        """
        self._ensure_not_busy()
        entry = validate_draft(draft).to_entry(self._generate_id())
        if not self._commit([entry] + self._entries):
            return None
        self._end_session()
        logger.info("Added entry %s dated %s", entry.id, entry.date)
        return entry

    def edit(self, entry_id: str, draft: EntryDraft) -> Optional[CashEntry]:
        """Replace every field of an entry except its id.

        Returns:
            The updated entry, or None if no entry has that id or the journal
            could not be saved

        Raises:
            ValidationError: If the draft is invalid; nothing is changed
            LedgerBusyError: If an export is in flight
        """
        self._ensure_not_busy()
        index = self._index_of(entry_id)
        if index is None:
            logger.debug("Ignoring edit of missing entry %s", entry_id)
            return None

        updated = validate_draft(draft).to_entry(entry_id)
        entries = list(self._entries)
        entries[index] = updated
        if not self._commit(entries):
            return None
        self._end_session()
        logger.info("Updated entry %s", entry_id)
        return updated

    def request_delete(self, entry_id: str) -> Optional[DeleteRequest]:
        """Ask to delete an entry; nothing changes until confirm_delete().

        A new request for the same entry voids the previous one.

        Returns:
            Confirmation token, or None if no entry has that id
        """
        self._ensure_not_busy()
        if self._index_of(entry_id) is None:
            logger.debug("Ignoring delete of missing entry %s", entry_id)
            return None
        request = DeleteRequest(token=uuid.uuid4().hex, entry_id=entry_id)
        self._pending_deletes[entry_id] = request.token
        return request

    def confirm_delete(self, request: DeleteRequest) -> bool:
        """Delete the entry named by a pending request.

        Tokens are single-use. If the journal cannot be saved the entry is
        kept and the request stays pending.

        Returns:
            True if an entry was removed
        """
        self._ensure_not_busy()
        entry_id = request.entry_id
        if self._pending_deletes.get(entry_id) != request.token:
            logger.debug("Unknown or spent delete token %s", request.token)
            return False

        index = self._index_of(entry_id)
        if index is None:
            del self._pending_deletes[entry_id]
            return False

        entries = list(self._entries)
        del entries[index]
        if not self._commit(entries):
            return False
        del self._pending_deletes[entry_id]
        if self._session is not None and self._session.editing_id == entry_id:
            self._end_session()
        logger.info("Deleted entry %s", entry_id)
        return True

    def discard_delete(self, request: DeleteRequest) -> None:
        """Drop a pending delete request without deleting."""
        if self._pending_deletes.get(request.entry_id) == request.token:
            del self._pending_deletes[request.entry_id]

    def delete(self, entry_id: str, confirm: Callable[[CashEntry], bool]) -> bool:
        """Delete an entry after the caller's confirmation.

        Args:
            entry_id: Entry to delete
            confirm: Called with the entry; deletion proceeds only if it returns True

        Returns:
            True if an entry was removed
        """
        request = self.request_delete(entry_id)
        if request is None:
            return False
        if not confirm(self.get_entry(entry_id)):
            self.discard_delete(request)
            return False
        if not self.confirm_delete(request):
            self.discard_delete(request)
            return False
        return True

    # Queries

    def filter(
        self,
        search_text: Optional[str] = "",
        start_date: Optional[str] = "",
        end_date: Optional[str] = "",
    ) -> list[CashEntry]:
        """Filter the collection by search text and inclusive date range."""
        return filter_entries(self._entries, search_text, start_date, end_date)

    def aggregate(self, entries: Optional[Sequence[CashEntry]] = None) -> NetBalance:
        """Net balances of the given entries, or of the whole collection."""
        return aggregate(self._entries if entries is None else entries)

    def build_view(
        self,
        title: str,
        search_text: Optional[str] = "",
        start_date: Optional[str] = "",
        end_date: Optional[str] = "",
        settings: Optional[AppSettings] = None,
        categories: Sequence[AccountingCategory] = (),
    ) -> LedgerView:
        """Snapshot the filtered collection and its totals for rendering."""
        entries = self.filter(search_text, start_date, end_date)
        return LedgerView(
            title=title,
            entries=tuple(entries),
            totals=aggregate(entries),
            settings=settings or AppSettings(),
            categories=tuple(categories),
        )

    # Export

    async def export_view(self, render_target: LedgerView, filename_base: str) -> Path:
        """Export a view as "{filename_base}.png" through the export adapter.

        The controller is busy until the adapter finishes or fails; the
        previous state is restored either way.

        Raises:
            LedgerBusyError: If another export is in flight
            ExportError: If no adapter is configured or the adapter fails
        """
        self._ensure_not_busy()
        if self.export_adapter is None:
            raise ExportError("No export adapter configured")

        filename = f"{filename_base}.png"
        previous_state = self._state
        self._state = LedgerState.EXPORTING
        try:
            path = await self.export_adapter.export_as_image(render_target, filename)
        except Exception as e:
            logger.exception("Export of %s failed", filename)
            raise ExportError(export_failed(filename, e)) from e
        finally:
            self._state = previous_state

        logger.info("Exported view to %s", path)
        return path
