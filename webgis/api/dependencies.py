"""Dependency providers wiring the app's Record Store into the services."""

from litestar.datastructures import State

from webgis.services import FeedbackLedger, ResponseWorkflow, UserDirectory
from webgis.storage import RecordStore


def provide_store(state: State) -> RecordStore:
    return state.store


def provide_user_directory(store: RecordStore, state: State) -> UserDirectory:
    return UserDirectory(store, bcrypt_rounds=state.bcrypt_rounds)


def provide_feedback_ledger(store: RecordStore) -> FeedbackLedger:
    return FeedbackLedger(store)


def provide_response_workflow(store: RecordStore) -> ResponseWorkflow:
    return ResponseWorkflow(store)
