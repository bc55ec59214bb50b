"""User-facing notices raised by dashboard operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NoticeVariant(str, Enum):
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.SUCCESS

    def as_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant.value,
        }


def auth_error_notice() -> Notice:
    return Notice(
        title="Authentication Error",
        description="Session expired or invalid token. Please sign out and sign back in.",
        variant=NoticeVariant.DESTRUCTIVE,
    )


def auth_missing_notice(message: str) -> Notice:
    return Notice(title="Error", description=message, variant=NoticeVariant.DESTRUCTIVE)


def submission_success_notice(count: int, attendance_date: str) -> Notice:
    return Notice(
        title="Attendance Submitted",
        description=f"Attendance recorded for {count} players on {attendance_date}.",
    )


def submission_failed_notice(failed: int, total: int, error_summary: str) -> Notice:
    return Notice(
        title="Submission Failed",
        description=(
            f"Failed to submit attendance for {failed} of {total} players. "
            f"Error: {error_summary}"
        ),
        variant=NoticeVariant.DESTRUCTIVE,
    )


def signed_out_notice() -> Notice:
    return Notice(
        title="Signed Out",
        description="You have been securely logged out.",
    )
