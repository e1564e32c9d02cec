"""Email syntax validation and canonicalization.

Two addresses that a provider delivers to the same mailbox must normalize
to the same string, since the normalized form is what the unique constraint
on ``employees.email`` compares.
"""

from email_validator import EmailNotValidError, validate_email

from employee_api.constants.validation import MAX_EMAIL_LENGTH

GMAIL_DOMAINS = frozenset({"gmail.com", "googlemail.com"})

ICLOUD_DOMAINS = frozenset({"icloud.com", "me.com"})

OUTLOOK_DOMAINS = frozenset(
    {
        "hotmail.at", "hotmail.be", "hotmail.ca", "hotmail.cl", "hotmail.co.il",
        "hotmail.co.nz", "hotmail.co.th", "hotmail.co.uk", "hotmail.com",
        "hotmail.com.ar", "hotmail.com.au", "hotmail.com.br", "hotmail.com.gr",
        "hotmail.com.mx", "hotmail.com.pe", "hotmail.com.tr", "hotmail.com.vn",
        "hotmail.cz", "hotmail.de", "hotmail.dk", "hotmail.es", "hotmail.fr",
        "hotmail.hu", "hotmail.id", "hotmail.ie", "hotmail.in", "hotmail.it",
        "hotmail.jp", "hotmail.kr", "hotmail.lv", "hotmail.my", "hotmail.ph",
        "hotmail.pt", "hotmail.sa", "hotmail.sg", "hotmail.sk",
        "live.be", "live.co.uk", "live.com", "live.com.ar", "live.com.mx",
        "live.de", "live.es", "live.eu", "live.fr", "live.it", "live.nl",
        "msn.com",
        "outlook.at", "outlook.be", "outlook.cl", "outlook.co.il", "outlook.co.nz",
        "outlook.co.th", "outlook.com", "outlook.com.ar", "outlook.com.au",
        "outlook.com.br", "outlook.com.gr", "outlook.com.pe", "outlook.com.tr",
        "outlook.com.vn", "outlook.cz", "outlook.de", "outlook.dk", "outlook.es",
        "outlook.fr", "outlook.hu", "outlook.id", "outlook.ie", "outlook.in",
        "outlook.it", "outlook.jp", "outlook.kr", "outlook.lv", "outlook.my",
        "outlook.ph", "outlook.pt", "outlook.sa", "outlook.sg", "outlook.sk",
        "passport.com",
    }
)

YAHOO_DOMAINS = frozenset(
    {
        "rocketmail.com", "yahoo.ca", "yahoo.co.uk", "yahoo.com", "yahoo.de",
        "yahoo.fr", "yahoo.in", "yahoo.it", "ymail.com",
    }
)

YANDEX_DOMAINS = frozenset(
    {"yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru"}
)


def is_valid_email(email: str) -> bool:
    """Check email syntax without any DNS lookups.

    Args:
        email: Raw email address

    Returns:
        True if the address is syntactically valid
    """
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def normalize_email(email: str) -> str | None:
    """Normalize an email address to its canonical mailbox form.

    The address is lowercased, then provider-specific aliasing is removed:
    Gmail drops dots and "+tag" suffixes and folds googlemail.com into
    gmail.com, Outlook and iCloud drop "+tag", Yahoo drops "-tag", and
    Yandex domains fold into yandex.ru. Normalizing a normalized address
    returns it unchanged.

    Internationalized domains are compared in their ASCII (punycode) form,
    so ``user@bücher.de`` and ``user@xn--bcher-kva.de`` are the same mailbox.

    Args:
        email: Syntactically valid email address

    Returns:
        Normalized address, or None if the address is invalid or the
        provider rules leave no local part
    """
    try:
        validated = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    local = validated.local_part.lower()
    domain = validated.ascii_domain.lower()

    if domain in GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in ICLOUD_DOMAINS or domain in OUTLOOK_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in YAHOO_DOMAINS:
        local = local.split("-", 1)[0]
    elif domain in YANDEX_DOMAINS:
        domain = "yandex.ru"

    if not local:
        return None
    return f"{local}@{domain}"
