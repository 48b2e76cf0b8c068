"""Static content tables for the cybersecurity awareness chatbot."""

from typing import Dict, Mapping, Sequence, Tuple, Union

# ------------------------------------------------------------------
# Knowledge table
# ------------------------------------------------------------------
PASSWORD_RESPONSES = (
    "Strong passwords should be at least 12 characters long and include a mix of "
    "uppercase, lowercase, numbers and symbols.",
    "Consider using a passphrase instead of a password, something like "
    "'PurpleElephant$JumpedOver42Clouds!'.",
    "Never reuse passwords across different accounts. A password manager keeps "
    "track of them all securely.",
    "Change your passwords immediately if a service you use reports a data breach.",
)

PHISHING_RESPONSES = (
    "Phishing emails often create a sense of urgency. Always verify unusual requests "
    "through another channel.",
    "Check the sender's email address carefully. Phishing attempts often use addresses "
    "that look similar to legitimate ones.",
    "Hover over links before clicking to see the actual URL. If it looks suspicious, "
    "don't click!",
    "Legitimate organizations will never ask for your password or sensitive "
    "information via email.",
)

PRIVACY_RESPONSES = (
    "Review the privacy settings on your social media accounts regularly, the "
    "platforms change their policies often.",
    "Be careful what personal information you share online. It can be used for "
    "social engineering attacks.",
    "Consider privacy-focused browsers and search engines that don't track your activity.",
    "Use private browsing mode when accessing sensitive accounts on shared computers.",
)

META_TOPICS: Tuple[str, ...] = ("how are you", "purpose", "help")

TOPIC_RESPONSES: Mapping[str, Union[str, Sequence[str]]] = {
    "how are you": "I'm functioning optimally! Ready to discuss cybersecurity.",
    "purpose": "I provide cybersecurity education to help you stay safe online.",
    "help": "I can explain: passwords, 2FA, phishing, VPNs, Wi-Fi security, email safety, "
    "privacy, scams and HTTPS.",
    "password": PASSWORD_RESPONSES,
    "2fa": "Two-factor authentication adds security by requiring:\n"
    "1. Something you know (password)\n"
    "2. Something you have (phone/device)\n"
    "Use authenticator apps instead of SMS when possible.",
    "phishing": PHISHING_RESPONSES,
    "vpn": "VPN benefits:\n"
    "- Encrypts all internet traffic\n"
    "- Essential on public Wi-Fi\n"
    "- Choose no-log providers\n"
    "- Doesn't provide complete anonymity",
    "wifi": "Public Wi-Fi usage tips:\n"
    "- Avoid sensitive activities\n"
    "- Use a VPN\n"
    "- Disable file sharing\n"
    "- Turn off auto-connect",
    "email": "Email safety tips:\n"
    "- Enable spam filters\n"
    "- Verify unusual requests\n"
    "- Don't open unexpected attachments",
    "privacy": PRIVACY_RESPONSES,
    "scam": "If you suspect a message is a scam, don't click anything. Report it and delete it.",
    "https": "HTTPS websites encrypt data between your browser and the server, keeping it "
    "safe from eavesdroppers. Look for the padlock before entering details.",
}

STOP_WORDS = frozenset(
    {
        "tell", "me", "about", "what", "is", "a", "the", "how", "do", "you",
        "explain", "your", "can", "and", "more", "some", "please", "give",
    }
)

# ------------------------------------------------------------------
# Sentiment
# ------------------------------------------------------------------
# Declaration order is the match priority.
SENTIMENT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "worried": ("worried", "concerned", "scared", "nervous", "afraid"),
    "positive": ("happy", "excited", "great", "thanks", "awesome"),
    "negative": ("angry", "frustrated", "upset", "annoyed", "hate"),
    "curious": ("what", "how", "explain", "why", "?"),
}

SENTIMENT_PREFIXES: Mapping[str, str] = {
    "worried": "I understand this can be concerning. ",
    "positive": "Great! ",
    "negative": "I'm sorry you're feeling frustrated. ",
    "curious": "That's a great question! ",
    "neutral": "",
}

# ------------------------------------------------------------------
# Contextual prefixes, highest threshold first
# ------------------------------------------------------------------
CONTEXT_PREFIX_TIERS: Tuple[Tuple[int, Tuple[str, ...]], ...] = (
    (
        4,
        (
            "You're becoming an expert on this one! Here's more: ",
            "Since this keeps coming up, one more reminder: ",
        ),
    ),
    (
        3,
        (
            "You've asked about this a few times, so here's another angle: ",
            "Let's dig a little deeper: ",
        ),
    ),
    (
        2,
        (
            "As we discussed before, ",
            "Coming back to this topic, ",
        ),
    ),
)

# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------
EXIT_COMMANDS = frozenset({"exit", "quit", "bye"})
HELP_COMMANDS = frozenset({"help", "options", "topics"})
NAME_QUERIES = ("what is my name", "what's my name", "who am i", "do you know my name")
INTEREST_QUERIES = ("what am i interested in", "my interest")
FAVORITES_COMMAND = "favorites"
FAVORITES_ADD = "favorites add"
INTEREST_MARKER = "interested in"

# ------------------------------------------------------------------
# Canned replies
# ------------------------------------------------------------------
FAREWELL = "Stay safe online! Goodbye."
REPHRASE = "I did not quite understand that. Could you rephrase?"
FALLBACK = "I'm not sure about that. Try 'help' for options."
HELP_INTRO = "I can help with these cybersecurity topics:"
NAME_RECALL = "Have you forgotten your name? I'm going to tell you anyways, {name}."
NAME_UNKNOWN = "I don't know your name yet."
INTEREST_RECALL = "As someone interested in {interest}, {response}"
NO_INTEREST = "You haven't told me what you're interested in yet. Try 'I'm interested in phishing'."
FAVORITE_PROMPT = "What would you like to save? "
FAVORITE_SAVED = "Saved to your favorites: {text}"
FAVORITE_EMPTY = "Nothing to save. Favorites cannot be empty."
NO_FAVORITES = "You haven't saved any favorites yet. Use 'favorites add <text>'."
FAVORITES_INTRO = "Your saved favorites:"

__all__ = [
    "CONTEXT_PREFIX_TIERS",
    "EXIT_COMMANDS",
    "FALLBACK",
    "FAREWELL",
    "FAVORITES_ADD",
    "FAVORITES_COMMAND",
    "FAVORITES_INTRO",
    "FAVORITE_EMPTY",
    "FAVORITE_PROMPT",
    "FAVORITE_SAVED",
    "HELP_COMMANDS",
    "HELP_INTRO",
    "INTEREST_MARKER",
    "INTEREST_QUERIES",
    "INTEREST_RECALL",
    "META_TOPICS",
    "NAME_QUERIES",
    "NAME_RECALL",
    "NAME_UNKNOWN",
    "NO_FAVORITES",
    "NO_INTEREST",
    "PASSWORD_RESPONSES",
    "PHISHING_RESPONSES",
    "PRIVACY_RESPONSES",
    "REPHRASE",
    "SENTIMENT_KEYWORDS",
    "SENTIMENT_PREFIXES",
    "STOP_WORDS",
    "TOPIC_RESPONSES",
]
