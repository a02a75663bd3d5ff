"""
app/ai_engine/prompt_templates.py — LangChain prompt templates for the AI engine.

One prompt chain:
  INTENT_CLASSIFICATION — offer + prospect profile → two-line INTENT / REASON answer
"""

from langchain_core.prompts import ChatPromptTemplate


# ── Intent Classification ─────────────────────────────────────────────────────

INTENT_CLASSIFICATION_PROMPT = ChatPromptTemplate.from_messages([
    (
        "system",
        (
            "You are a sales qualification assistant. You read a product offer and a "
            "prospect profile and judge how likely the prospect is to buy."
        ),
    ),
    (
        "human",
        """Product/Offer: {offer_name}
Value propositions: {value_props}
Ideal use cases: {ideal_use_cases}

Prospect:
Name: {name}
Role: {role}
Company: {company}
Industry: {industry}
Location: {location}
LinkedIn Bio: {linkedin_bio}

Task: Classify intent as exactly one of: High, Medium, Low.
Respond in this exact format:

INTENT: <High|Medium|Low>
REASON: <One or two sentence explanation why.>

Only output those two lines (INTENT and REASON).
""",
    ),
])
