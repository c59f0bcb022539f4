"""
Flattens a client record against a questionnaire into the plain-text prompt
handed to the document-generating LLM, plus the raw JSON download.
"""

from datetime import datetime
import json
import os
import re

from models import Answer, ClientRecord, Schema

from .ips import IPS_SCHEMA
from .cps import CPS_SCHEMA

RULE_WIDTH = 72
NOT_PROVIDED = "[Not provided]"
NO_RESPONSE = "   → [NO RESPONSE PROVIDED]"


class ExportUnavailableError(Exception):
    """The export could not be delivered (file not writable, no clipboard, ...)."""


IPS_INSTRUCTIONS = [
    "You are an investment advisor representative drafting a formal Investment Policy Statement (IPS) "
    "for the client above.",
    "Using the intake data provided, generate a comprehensive, personalized IPS document following this structure:",
    "",
    "1. EXECUTIVE SUMMARY — Brief overview of situation, goals, recommended strategy.",
    "",
    "2. INVESTOR PROFILE — Personal background, employment, income, net worth, dependents, insurance, "
    "accounts from Section 1.",
    "",
    "3. INVESTMENT OBJECTIVES",
    "   A. Return Objectives: Derive a reasonable return target from goals, milestones, income needs, and growth "
    "preferences (Section 2). Justify a range based on goals and time horizon — do NOT simply restate a "
    "client-provided number.",
    "   B. Risk Objectives: Synthesize willingness (Section 4 behavioral responses) with capacity (financial "
    "cushion, income stability). Classify as Conservative / Moderately Conservative / Moderate / Moderately "
    "Aggressive / Aggressive with rationale.",
    "",
    "4. INVESTMENT CONSTRAINTS",
    "   A. Time Horizon — from Section 3 with flexibility notes.",
    "   B. Liquidity — from Section 5 with quantified needs.",
    "   C. Tax — from Section 6 with asset location recommendations.",
    "   D. Legal & Regulatory — from Section 7.",
    "   E. Unique Circumstances — from Section 8.",
    "",
    "5. ASSET ALLOCATION POLICY — Target percentages, ±5% permissible ranges, prohibited investments per client "
    "preferences, vehicle preferences.",
    "",
    "6. REBALANCING POLICY — Consistent with Section 10 review preferences.",
    "",
    "7. PERFORMANCE BENCHMARKS — Blended benchmark matching the proposed allocation.",
    "",
    "8. MONITORING & REVIEW — Reporting frequency, review schedule, communication preferences, revision triggers "
    "from Section 10.",
    "",
    "9. ROLES & RESPONSIBILITIES — Advisor and client duties. Incorporate delegation/authority from Section 9.",
    "",
    "10. SIGNATURES — Blocks for client, co-client/spouse (if applicable per marital status), and advisor.",
    "",
    "FORMATTING REQUIREMENTS:",
    "- Use formal, professional language appropriate for a legal/financial document.",
    "- Where the client left a question unanswered ([NO RESPONSE PROVIDED]), note it as \"To be discussed\" or "
    "\"Pending client input\" — do not guess.",
    "- Include the client's name and date throughout as appropriate.",
    "- The IPS should be a standalone document ready for client review, not a summary of the questionnaire.",
]

CPS_INSTRUCTIONS = [
    "You are an investment advisor representative drafting a formal Custody Policy Statement (CPS) for the "
    "client's digital assets described above.",
    "Using the intake data provided, generate a comprehensive, personalized CPS document following this structure:",
    "",
    "1. EXECUTIVE SUMMARY — Client's digital asset position, custody objectives, and recommended custody model.",
    "",
    "2. DIGITAL ASSET PROFILE — Experience, asset types, approximate holdings, current custody arrangements, and "
    "any prior security incidents from Section 1.",
    "",
    "3. CUSTODY MODEL",
    "   A. Recommendation: Self-custody, third-party custody, or hybrid, justified by risk tolerance, key "
    "management comfort, and awareness of self-custody risks (Section 2).",
    "   B. Allocation: If hybrid, describe what portion of holdings sits under each arrangement and why.",
    "",
    "4. SECURITY REQUIREMENTS — Required controls (multi-signature, cold storage, insurance, geographic "
    "distribution, 2FA, seed phrase backups) drawn from Section 2 priorities and current practices. Identify gaps.",
    "",
    "5. ACCESS & OPERATIONS — Expected transaction frequency, use cases, and custody budget from Section 3. "
    "Describe how access is balanced against security.",
    "",
    "6. REGULATORY & TAX COMPLIANCE — Jurisdictions, reporting needs, and KYC-compliant platform requirements "
    "from Section 4.",
    "",
    "7. ESTATE & SUCCESSION PLANNING — How keys and account access transfer on incapacity or death, consistent "
    "with Section 4.",
    "",
    "8. INCIDENT RESPONSE — Steps to follow on suspected compromise, lost keys, or custodian failure.",
    "",
    "9. REVIEW SCHEDULE — When this CPS should be revisited and events that trigger an earlier review.",
    "",
    "10. SIGNATURES — Blocks for client and advisor.",
    "",
    "FORMATTING REQUIREMENTS:",
    "- Use formal, professional language appropriate for a legal/financial document.",
    "- Where the client left a question unanswered ([NO RESPONSE PROVIDED]), note it as \"To be discussed\" or "
    "\"Pending client input\" — do not guess.",
    "- Never include or request private keys, seed phrases, or passwords.",
    "- The CPS should be a standalone document ready for client review, not a summary of the questionnaire.",
]

INSTRUCTIONS = {
    IPS_SCHEMA.key: IPS_INSTRUCTIONS,
    CPS_SCHEMA.key: CPS_INSTRUCTIONS,
}


def rule(ch, n=RULE_WIDTH):
    return ch * n


def format_updated(updated_at):
    """Render epoch milliseconds as a local date-time string."""
    if isinstance(updated_at, bool) or not isinstance(updated_at, (int, float)) or updated_at <= 0:
        return NOT_PROVIDED
    try:
        return datetime.fromtimestamp(updated_at / 1000).strftime("%c")
    except (OverflowError, OSError, ValueError):
        return NOT_PROVIDED


def answer_lines(answer: Answer):
    selections = answer.selections
    free_text = answer.value.strip()
    assets = answer.assets.strip()
    liabilities = answer.liabilities.strip()
    goals = answer.filled_goals()
    account_values = answer.account_values

    has_any = (selections or free_text or answer.follow_up_checks or goals or account_values
               or assets or liabilities)
    if not has_any:
        return [NO_RESPONSE]

    lines = []
    if selections and account_values:
        for s in selections:
            v = account_values.get(s)
            lines.append(f"   → {s}: ${v}" if v else f"   → {s}")
    elif selections:
        lines.append(f"   → Selected: {', '.join(selections)}")
    if answer.follow_up_checks:
        lines.append(f"   → Also: {', '.join(answer.follow_up_checks)}")
    if free_text:
        lines.append(f"   → {free_text}")
    if assets:
        lines.append(f"   → Assets: {assets}")
    if liabilities:
        lines.append(f"   → Liabilities: {liabilities}")
    for i, g in enumerate(goals, start=1):
        lines.append(
            f"   → Goal {i}. {g.get('goal') or '[unnamed]'}"
            f" | Target: {g.get('amount') or '[not specified]'}"
            f" | Timeline: {g.get('timeline') or '[not specified]'}"
        )
    return lines


def build_export(schema: Schema, record, instructions=None) -> str:
    if not isinstance(record, ClientRecord):
        record = ClientRecord.from_dict(record if isinstance(record, dict) else {})
    if instructions is None:
        instructions = INSTRUCTIONS.get(schema.key, [])

    L = []
    L.append(rule("="))
    L.append(f"{schema.title} — CLIENT INTAKE DATA")
    L.append(rule("="))
    L.append("")
    L.append(f"Client Name: {record.client_name or NOT_PROVIDED}")
    L.append(f"Date: {record.date or NOT_PROVIDED}")
    L.append(f"Advisor: {record.advisor or NOT_PROVIDED}")
    L.append(f"Updated: {format_updated(record.updated_at)}")
    L.append("")

    number = 0
    for section in schema.sections:
        L.append(rule("-"))
        L.append(f"SECTION {section.num}: {section.title.upper()}")
        L.append(rule("-"))
        L.append("")
        for sub in section.subsections:
            if sub.label:
                L.append(f"### {sub.label}")
            for q in sub.questions:
                number += 1
                L.append(f"Q{number}. {q.text}")
                L.extend(answer_lines(record.answer(q.id)))
                L.append("")

    L.append(rule("="))
    L.append("END OF CLIENT INTAKE DATA")
    L.append(rule("="))
    L.append("")
    L.append(rule("─"))
    L.append(f"INSTRUCTIONS FOR {schema.key.upper()} GENERATION")
    L.append(rule("─"))
    L.append("")
    L.extend(instructions)

    return "\n".join(L)


def build_ips_export(record) -> str:
    return build_export(IPS_SCHEMA, record)


def build_cps_export(record) -> str:
    return build_export(CPS_SCHEMA, record)


def build_json_export(record) -> str:
    data = record.to_dict() if isinstance(record, ClientRecord) else record
    return json.dumps(data, ensure_ascii=False, indent=2)


def safe_name(name):
    return re.sub(r"\s+", "_", name or "") or "export"


def export_filename(kind, record, fmt="txt"):
    name = record.client_name if isinstance(record, ClientRecord) else (record or {}).get("clientName")
    if fmt == "json":
        return f"Client_Data_{safe_name(name)}.json"
    return f"{kind.upper()}_LLM_{safe_name(name)}.txt"


def write_export(path, text):
    """Write an export as UTF-8; failures surface as ExportUnavailableError."""
    try:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ExportUnavailableError(f"Could not write {path}: {e}") from e
    return path
