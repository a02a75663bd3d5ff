"""
app/ai_engine/processor.py — LangChain chain implementation for intent classification.

Public functions:
  build_prompt_variables(offer, lead)  → dict of template variables
  render_intent_prompt(variables)      → the prompt as plain text
  classify_intent(variables)           → ClassifierSuccess | ClassifierFailure
"""

import logging
from dataclasses import dataclass
from typing import Union

from app.ai_engine.prompt_templates import INTENT_CLASSIFICATION_PROMPT
from app.ai_engine.utils import build_openrouter_llm, extract_response_text, truncate_for_context
from app.db.models import Lead, Offer

logger = logging.getLogger(__name__)

BIO_PLACEHOLDER = "N/A"


# ── Output dataclasses ────────────────────────────────────────────────────────

@dataclass
class ClassifierSuccess:
    text: str | None                # None when the envelope held no usable text


@dataclass
class ClassifierFailure:
    error: str


ClassifierResult = Union[ClassifierSuccess, ClassifierFailure]


# ── Prompt ────────────────────────────────────────────────────────────────────

def build_prompt_variables(offer: Offer, lead: Lead) -> dict[str, str]:
    """Flatten an offer and a lead into the INTENT_CLASSIFICATION_PROMPT variables."""
    return {
        "offer_name": offer.name,
        "value_props": "; ".join(offer.value_props or []),
        "ideal_use_cases": "; ".join(offer.ideal_use_cases or []),
        "name": lead.name or "",
        "role": lead.role or "",
        "company": lead.company or "",
        "industry": lead.industry or "",
        "location": lead.location or "",
        "linkedin_bio": truncate_for_context(lead.linkedin_bio, max_chars=2000) or BIO_PLACEHOLDER,
    }


def render_intent_prompt(variables: dict[str, str]) -> str:
    """Render the classification prompt as plain text (for logs and the CLI)."""
    return INTENT_CLASSIFICATION_PROMPT.format(**variables)


# ── Intent Classification ─────────────────────────────────────────────────────

def classify_intent(variables: dict[str, str]) -> ClassifierResult:
    """
    Ask the LLM to classify a prospect's buying intent.

    Issues exactly one request. Any error — bad configuration, transport
    failure, timeout — is returned as ClassifierFailure instead of raised,
    so one lead's failure never aborts a batch.

    Args:
        variables: Output of build_prompt_variables().

    Returns:
        ClassifierSuccess with the response text (possibly None), or ClassifierFailure.
    """
    logger.info("Classifying intent: %s (%s)", variables.get("name"), variables.get("role"))

    try:
        llm = build_openrouter_llm()
        chain = INTENT_CLASSIFICATION_PROMPT | llm
        response = chain.invoke(variables)
    except Exception as exc:
        logger.warning("Intent classification failed for %s: %s", variables.get("name"), exc)
        return ClassifierFailure(error=str(exc) or type(exc).__name__)

    text = extract_response_text(response)
    if text is None:
        logger.warning("Model returned no text for %s", variables.get("name"))
    return ClassifierSuccess(text=text)
