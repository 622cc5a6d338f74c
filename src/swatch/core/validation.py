"""
Reference health report.

Traces every reference-shaped leaf in the loaded documents against the
complete reference map and reports what would not resolve. Tracing is
silent; only ``resolve`` emits diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .ir import DEFAULT_POLICY, DocumentRole, ResolutionPolicy
from .loader import LoadedDocuments, build_document_references
from .references import ResolutionStatus, is_reference, trace_reference
from .tree import iter_leaves


@dataclass
class ReferenceIssue:
    """One leaf whose reference did not resolve cleanly."""

    document: str
    token: str
    reference: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        return {
            "document": self.document,
            "token": self.token,
            "reference": self.reference,
            "detail": self.detail,
        }


@dataclass
class ValidationReport:
    core_tokens: int = 0
    sys_tokens: int = 0
    references: int = 0
    broken: list[ReferenceIssue] = field(default_factory=list)
    circular: list[ReferenceIssue] = field(default_factory=list)
    fallbacks: list[ReferenceIssue] = field(default_factory=list)
    overwritten_paths: list[str] = field(default_factory=list)
    skipped_documents: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.broken and not self.circular

    @property
    def total_tokens(self) -> int:
        return self.core_tokens + self.sys_tokens

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "stats": {
                "totalTokens": self.total_tokens,
                "coreTokens": self.core_tokens,
                "systemTokens": self.sys_tokens,
                "references": self.references,
                "brokenReferences": len(self.broken),
                "circularReferences": len(self.circular),
                "fallbackReferences": len(self.fallbacks),
            },
            "broken": [i.to_dict() for i in self.broken],
            "circular": [i.to_dict() for i in self.circular],
            "fallbacks": [i.to_dict() for i in self.fallbacks],
            "overwrittenPaths": list(self.overwritten_paths),
            "skippedDocuments": list(self.skipped_documents),
        }


def validate_documents(
    loaded: LoadedDocuments,
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> ValidationReport:
    """Check every reference in ``loaded`` against the merged reference map."""
    refs = build_document_references(loaded)
    report = ValidationReport(
        overwritten_paths=list(refs.overwritten),
        skipped_documents=list(loaded.skipped),
    )

    for document in loaded.core + loaded.sys:
        is_core = document.spec.role is DocumentRole.CORE
        for path, leaf in iter_leaves(document.tree, document.spec.prefix):
            if is_core:
                report.core_tokens += 1
            else:
                report.sys_tokens += 1
            if not is_reference(leaf.value):
                continue
            report.references += 1
            result = trace_reference(leaf.value, refs, policy)
            issue = ReferenceIssue(
                document=document.spec.path,
                token=path,
                reference=leaf.value[1:-1],
                detail=" -> ".join(result.chain),
            )
            if result.status is ResolutionStatus.UNRESOLVED:
                issue.detail = f"missing {result.missing}"
                report.broken.append(issue)
            elif result.status is ResolutionStatus.CYCLE:
                report.circular.append(issue)
            elif result.used_fallback:
                report.fallbacks.append(issue)
    return report
