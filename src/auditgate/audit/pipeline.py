"""End-to-end gate run: parse, detect, normalize, evaluate."""

from __future__ import annotations

import logging
import time
from datetime import date

from auditgate.audit.detector import describe_unrecognized, detect
from auditgate.audit.normalizer import normalize
from auditgate.audit.policy import evaluate
from auditgate.config.allowlist import allowlist_notices
from auditgate.constants.config import DEFAULT_EXPIRY_WARNING_DAYS
from auditgate.exceptions import UnsupportedSchemaError
from auditgate.io import parse_json_document
from auditgate.model import AuditResult, PolicyConfig, SchemaKind

logger = logging.getLogger(__name__)


def run_audit(
    raw: bytes | str,
    policy: PolicyConfig,
    *,
    today: date | None = None,
    expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
) -> AuditResult:
    """Run the full gate over raw ``npm audit --json`` output.

    Raises ``InvalidJsonError`` or ``UnsupportedSchemaError``; malformed
    individual entries are skipped and counted instead.
    """
    started_at = time.perf_counter()

    doc = parse_json_document(raw)
    kind = detect(doc)
    logger.debug("Detected report shape: %s", kind.value)
    if kind is SchemaKind.UNRECOGNIZED:
        raise UnsupportedSchemaError(describe_unrecognized(doc))

    report = normalize(doc, kind)
    verdict = evaluate(report.records, policy)
    notices = allowlist_notices(
        policy.entries,
        today=today or date.today(),
        warning_days=expiry_warning_days,
    )

    logger.info(
        "Audit verdict: %s (%d blocking, %d accepted, %d skipped)",
        "PASS" if verdict.passed else "FAIL",
        len(verdict.blocking),
        len(verdict.accepted),
        report.skipped_count,
    )
    return AuditResult(
        report=report,
        verdict=verdict,
        policy=policy,
        notices=notices,
        duration_seconds=time.perf_counter() - started_at,
    )
