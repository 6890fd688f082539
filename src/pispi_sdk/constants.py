"""PI-SPI constants: endpoints, status codes and limits shared across the SDK."""

PRODUCTION_BASE_URL = "https://api.pi-bceao.com/piz/v1"
SANDBOX_BASE_URL = "https://sandbox.api.pi-bceao.com/piz/v1"
DEFAULT_BASE_URL = SANDBOX_BASE_URL

DEFAULT_API_VERSION = "1.0.0"

# Payment lifecycle as reported by the platform
PAYMENT_STATUSES = {
    "INITIE": "Initiated, awaiting confirmation after alias lookup",
    "ENVOYE": "Sent, the PSP has forwarded the request",
    "IRREVOCABLE": "Confirmed and irreversible",
    "REJETE": "Rejected",
}

ACCOUNT_STATUSES = {
    "OPEN": "OUVERT",
    "BLOCKED": "BLOQUE",
    "CLOSED": "CLOTURE",
}

ACCOUNT_TYPES = {
    "CURRENT": "CACC",
    "SAVINGS": "SVGS",
}

CLIENT_TYPES = {
    "INDIVIDUAL": "P",
    "MERCHANT": "C",
    "BUSINESS": "B",
    "GOVERNMENT": "G",
}

# ISO code -> country name, for the eight UEMOA member states
UEMOA_COUNTRIES = {
    "BJ": "Benin",
    "BF": "Burkina Faso",
    "CI": "Côte d'Ivoire",
    "GW": "Guinea-Bissau",
    "ML": "Mali",
    "NE": "Niger",
    "SN": "Senegal",
    "TG": "Togo",
}

CURRENCY = "XOF"
CENTIMES_PER_XOF = 100

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20
DEFAULT_ALIASES_PER_ACCOUNT = 20

WEBHOOK_EVENTS = (
    "PAIEMENT_RECU",
    "PAIEMENT_ENVOYE",
    "PAIEMENT_REJETE",
    "RTP_RECU",
    "RTP_REJETE",
    "ANNULATION_DEMANDE",
    "ANNULATION_REJETE",
    "RETOUR_ENVOYE",
    "RETOUR_REJETE",
    "RETOUR_RECU",
)
