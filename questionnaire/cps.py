"""
Custody Policy Statement (CPS) intake questions for digital assets.

Same question types and rules as the IPS questionnaire; ids use the
`cps<N>` namespace so both can live in one client record.
"""

from models import build_schema

CPS_SECTIONS = [
    {
        "num": 1,
        "title": "Digital Asset Background",
        "subtitle": "Experience, holdings, and current custody",
        "instruction": "This section establishes the client's cryptocurrency experience and current position.",
        "subsections": [
            {
                "label": None,
                "questions": [
                    {
                        "id": "cps1",
                        "text": "What is your level of experience with cryptocurrencies? "
                                "What is your most advanced exposure?",
                        "type": "combo",
                        "options": ["Beginner", "Intermediate", "Expert"],
                        "followUp": "Describe your most advanced exposure:",
                    },
                    {
                        "id": "cps2",
                        "text": "What types of crypto assets do you currently own or plan to acquire?",
                        "type": "check",
                        "options": [
                            "Bitcoin",
                            "Ethereum",
                            "Altcoins",
                            "NFTs",
                            "Stablecoins",
                            "DeFi Tokens",
                            "None Currently",
                        ],
                        "noneOptions": ["None Currently"],
                        "followUp": "Other assets or details:",
                    },
                    {
                        "id": "cps3",
                        "text": "Approximately what is the total value of your crypto holdings?",
                        "type": "combo",
                        "options": [
                            "$50,000–$100,000",
                            "$100,000–$250,000",
                            "$250,000–$500,000",
                            "$500,000–$1M",
                            "$1M–$2.5M",
                            "Over $2.5M",
                        ],
                        "followUp": "Additional context:",
                    },
                    {
                        "id": "cps4",
                        "text": "How are your crypto assets currently custodied?",
                        "type": "check",
                        "options": [
                            "ETFs",
                            "Digital Asset Trusts (DATs)",
                            "Exchange (e.g., Coinbase, Kraken)",
                            "Hardware Wallet (e.g., Ledger, Trezor)",
                            "Software Wallet",
                            "Paper Wallet",
                            "Not Currently Holding",
                        ],
                        "noneOptions": ["Not Currently Holding"],
                        "followUp": "Specify platforms or devices:",
                    },
                    {
                        "id": "cps5",
                        "text": "Have you ever experienced any security incidents with your crypto, such as hacks, "
                                "lost keys, or scams? If so, how did you react?",
                        "type": "text",
                    },
                ],
            },
        ],
    },
    {
        "num": 2,
        "title": "Risk & Security Preferences",
        "subtitle": "Custody approach, key management, and security practices",
        "instruction": "Determines the appropriate custody model based on the client's risk tolerance "
                       "and technical comfort.",
        "subsections": [
            {
                "label": None,
                "questions": [
                    {
                        "id": "cps6",
                        "text": "What is your risk tolerance for crypto custody?",
                        "type": "combo",
                        "options": [
                            "Self-Custody (full control)",
                            "Third-Party Custody (convenience & insurance)",
                            "Hybrid (split between both)",
                            "Unsure — Need Guidance",
                        ],
                        "followUp": "Additional thoughts:",
                    },
                    {
                        "id": "cps7",
                        "text": "Are you comfortable managing private keys yourself, or would you prefer "
                                "a custodial service?",
                        "type": "combo",
                        "options": ["Comfortable Self-Managing", "Prefer Custodial Service", "Open to Either"],
                        "followUp": "Notes:",
                    },
                    {
                        "id": "cps8",
                        "text": "Are you aware of the risks associated with self-custody (asset loss, "
                                "social engineering, and wrench attacks)?",
                        "type": "combo",
                        "options": ["Yes, Fully Aware", "Somewhat Aware", "Not Aware — Need Education"],
                    },
                    {
                        "id": "cps9",
                        "text": "Do you prioritize any of the following custody features?",
                        "type": "check",
                        "options": [
                            "Multi-Signature Wallets",
                            "Cold Storage",
                            "Insurance Against Theft/Loss",
                            "Geographic Distribution",
                            "Institutional-Grade Security",
                            "No Specific Preferences",
                        ],
                        "noneOptions": ["No Specific Preferences"],
                        "followUp": "Other priorities:",
                    },
                    {
                        "id": "cps10",
                        "text": "What security practices do you currently use?",
                        "type": "check",
                        "options": [
                            "Two-Factor Authentication (2FA)",
                            "Seed Phrase Backups",
                            "Hardware Security Modules",
                            "Password Manager",
                            "Biometric Authentication",
                            "Air-Gapped Devices",
                            "None",
                        ],
                        "noneOptions": ["None"],
                        "followUp": "Other practices:",
                    },
                ],
            },
        ],
    },
    {
        "num": 3,
        "title": "Goals & Usage",
        "subtitle": "Investment objectives, access frequency, and budget",
        "instruction": None,
        "subsections": [
            {
                "label": None,
                "questions": [
                    {
                        "id": "cps11",
                        "text": "What are your primary goals for these crypto assets?",
                        "type": "check",
                        "options": [
                            "Long-Term Investment (HODL)",
                            "Active Trading",
                            "Staking / Yield Farming",
                            "DeFi Participation",
                            "Payments / Transactions",
                            "Portfolio Diversification",
                        ],
                        "followUp": "Additional objectives:",
                    },
                    {
                        "id": "cps12",
                        "text": "How frequently do you plan to access or transact with your crypto?",
                        "type": "combo",
                        "options": ["Daily", "Weekly", "Monthly", "Quarterly", "Rarely"],
                    },
                    {
                        "id": "cps13",
                        "text": "Are there specific use cases, like integrating with traditional portfolios "
                                "or using crypto for payments?",
                        "type": "text",
                    },
                    {
                        "id": "cps14",
                        "text": "What budget do you have for custody solutions?",
                        "type": "combo",
                        "options": [
                            "Minimal (free / low-cost tools)",
                            "Moderate ($50–$300/yr for hardware/subscriptions)",
                            "Significant (institutional custodian fees)",
                            "Need Guidance on Options",
                        ],
                        "followUp": "Notes:",
                    },
                ],
            },
        ],
    },
    {
        "num": 4,
        "title": "Regulatory & Estate Planning",
        "subtitle": "Jurisdiction, tax compliance, and succession",
        "instruction": "Ensures custody solutions meet regulatory requirements and estate planning needs.",
        "subsections": [
            {
                "label": None,
                "questions": [
                    {
                        "id": "cps15",
                        "text": "In which jurisdictions are you tax-resident or hold citizenship?",
                        "type": "text",
                    },
                    {
                        "id": "cps16",
                        "text": "Are you aware of tax implications for your crypto holdings? Do you need custody "
                                "options that support reporting (e.g., KYC-compliant platforms)?",
                        "type": "combo",
                        "options": [
                            "Yes, Aware — Need Compliant Platform",
                            "Somewhat Aware",
                            "Not Aware — Need Education",
                            "Already Working with a CPA on This",
                        ],
                        "followUp": "Details:",
                    },
                    {
                        "id": "cps17",
                        "text": "Do you have an estate plan for the transfer of your digital assets?",
                        "type": "combo",
                        "options": ["Yes, Fully Documented", "Partially — Needs Updating", "No — Need to Create One"],
                        "followUp": "Details or concerns:",
                    },
                ],
            },
        ],
    },
]

CPS_SCHEMA = build_schema("cps", "CUSTODY POLICY STATEMENT", CPS_SECTIONS)
