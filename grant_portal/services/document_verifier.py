"""
Document verification

A DocumentVerifier scores an uploaded document against the fields its
document type must yield. Two implementations:

  - FieldCoverageVerifier: deterministic, scores the fields supplied by the
    upload pipeline.
  - LLMDocumentVerifier: asks an OpenAI-compatible chat model to extract the
    required fields from the document text, then scores like the coverage
    verifier.

The score is turned into a document status by derive_verification_status.
"""
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, SystemMessage
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from grant_portal.config import settings
from grant_portal.domain import DocumentStatus, get_required_fields
from grant_portal.errors import ValidationError
from grant_portal.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

APPROVAL_THRESHOLD = 85
REVIEW_THRESHOLD = 60

SYSTEM_PROMPT = "You verify eligibility documents for a grant portal. You only extract data, you never make decisions."


@dataclass
class VerificationResult:
    """Outcome of one verification call"""
    verified: bool
    score: int
    extracted_fields: Dict[str, str]
    issues: List[str] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def derive_verification_status(score: int) -> DocumentStatus:
    """
    Map a verification score to a document status

    85-100 approved, 60-84 pending (human review), below 60 requires
    resubmission. Only an administrator can reject a document.
    """
    if score < 0 or score > 100:
        raise ValidationError(f"Verification score must be between 0 and 100, got {score}")
    if score >= APPROVAL_THRESHOLD:
        return DocumentStatus.APPROVED
    if score >= REVIEW_THRESHOLD:
        return DocumentStatus.PENDING
    return DocumentStatus.REQUIRES_RESUBMISSION


def _is_present(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def score_field_coverage(
    required_fields: Sequence[str],
    extracted_fields: Dict[str, str],
    unverifiable_score: int
) -> VerificationResult:
    """Score how many required fields were extracted"""
    if not required_fields:
        return VerificationResult(
            verified=unverifiable_score >= APPROVAL_THRESHOLD,
            score=unverifiable_score,
            extracted_fields=dict(extracted_fields),
            message="No automatic checks exist for this document type, a reviewer has to confirm it.",
        )

    missing = [name for name in required_fields if not _is_present(extracted_fields.get(name))]
    present = len(required_fields) - len(missing)
    score = round(100 * present / len(required_fields))

    if not missing:
        message = "Document appears to be valid and all required information was successfully extracted."
    else:
        message = f"{len(missing)} of {len(required_fields)} required fields could not be extracted."

    return VerificationResult(
        verified=score >= APPROVAL_THRESHOLD,
        score=score,
        extracted_fields=dict(extracted_fields),
        issues=[f"Missing required field: {name}" for name in missing],
        message=message,
    )


class DocumentVerifier(ABC):
    """Port: scores a document against its type's required fields"""

    @abstractmethod
    def verify(
        self,
        document_type: str,
        extracted_fields: Optional[Dict[str, str]] = None,
        file_path: Optional[str] = None
    ) -> VerificationResult:
        """
        Verify one document

        Args:
            document_type: Document type name; unknown types have no required fields
            extracted_fields: Fields already extracted by the upload pipeline
            file_path: Location of the uploaded file

        Returns:
            VerificationResult with a score in 0-100. A low score is a valid result.
        """
        ...


class FieldCoverageVerifier(DocumentVerifier):
    """Deterministic verifier scoring the supplied fields"""

    def __init__(self, unverifiable_score: Optional[int] = None):
        self.unverifiable_score = (
            settings.unverifiable_document_score if unverifiable_score is None else unverifiable_score
        )

    def verify(self, document_type, extracted_fields=None, file_path=None):
        return score_field_coverage(
            get_required_fields(document_type),
            extracted_fields or {},
            self.unverifiable_score,
        )


class LLMDocumentVerifier(DocumentVerifier):
    """Extracts required fields from document text with a chat model"""

    def __init__(self, llm=None, rate_limiter: Optional[RateLimiter] = None):
        if llm is None:
            llm = ChatOpenAI(
                base_url=settings.llm_api_base_url,
                api_key=settings.llm_api_key,
                model=settings.llm_model_name,
                temperature=0,
            )
        self.llm = llm
        self.rate_limiter = rate_limiter or RateLimiter(max_calls=settings.llm_calls_per_minute, time_window=60)
        self.coverage = FieldCoverageVerifier()

    def build_extraction_prompt(self, document_type: str, required_fields: Sequence[str], text: str) -> str:
        field_list = "\n".join(f"- {name}" for name in required_fields)
        return f"""Document type: {document_type}

Extract these fields from the document text below:
{field_list}

Rules:
1. Copy values exactly as written in the document.
2. Use an empty string for a field that does not appear in the document.
3. Answer with a single JSON object mapping field name to value, nothing else.

Document text:
\"\"\"
{text}
\"\"\""""

    @staticmethod
    def _extract_json(content: str) -> dict:
        if "```" in content:
            content = content.split("```json")[-1] if "```json" in content else content.split("```")[1]
            content = content.split("```")[0]
        match = re.search(r"\{.*\}", content, re.DOTALL)
        if not match:
            raise ValueError("No JSON object in model response")
        return json.loads(match.group(0))

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type(Exception),
        reraise=True
    )
    def extract_fields(self, document_type: str, required_fields: Sequence[str], text: str) -> Dict[str, str]:
        """Ask the model for the required fields, retried on failures"""
        self.rate_limiter.wait_if_needed()
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=self.build_extraction_prompt(document_type, required_fields, text)),
        ]
        response = self.llm.invoke(messages)
        data = self._extract_json(response.content)
        return {name: str(data[name]) for name in required_fields if data.get(name) not in (None, "")}

    def _read_text(self, file_path: Optional[str]) -> Optional[str]:
        if not file_path:
            return None
        path = Path(file_path)
        if not path.is_file():
            logger.warning(f"Document file not found: {file_path}")
            return None
        text = path.read_text(encoding="utf-8", errors="ignore").strip()
        return text[:settings.llm_max_document_chars] or None

    def verify(self, document_type, extracted_fields=None, file_path=None):
        supplied = dict(extracted_fields or {})
        required_fields = get_required_fields(document_type)
        text = self._read_text(file_path)

        if required_fields and text:
            try:
                extracted = self.extract_fields(document_type, required_fields, text)
                # Fields supplied with the upload win over model output
                supplied = {**extracted, **{k: v for k, v in supplied.items() if _is_present(v)}}
            except Exception as e:
                logger.error(f"LLM extraction failed for {file_path}: {e}")

        return self.coverage.verify(document_type, supplied, file_path)


@lru_cache()
def get_document_verifier() -> DocumentVerifier:
    """Verifier selected by settings.document_verifier_backend"""
    backend = settings.document_verifier_backend.lower()
    if backend == "llm":
        if not settings.llm_api_base_url:
            logger.warning("document_verifier_backend=llm without llm_api_base_url, using coverage verifier")
            return FieldCoverageVerifier()
        logger.info(f"Using LLM document verifier ({settings.llm_model_name})")
        return LLMDocumentVerifier()
    if backend != "coverage":
        logger.warning(f"Unknown document verifier backend '{backend}', using coverage verifier")
    return FieldCoverageVerifier()
