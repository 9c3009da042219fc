"""
Taxonomie des erreurs du service d'inscription.

Chaque erreur porte un code HTTP et un message affichable à l'acheteur.
Les gestionnaires FastAPI (app_setup.exceptions) les transforment en
{"error": message} avec le code associé.
- ValidationError (400): saisie invalide, corrigeable par l'acheteur
- ConfigurationError (500): secret manquant, corrigeable par l'exploitant
- UpstreamError (400): refus de Stripe, message déjà destiné à l'acheteur
- ProcessorUnavailableError (500): Stripe injoignable / erreur serveur Stripe
- SignatureError (400): signature webhook invalide, périmée ou mal formée
"""


class RegistrationError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RegistrationError):
    status_code = 400
    default_message = "Invalid request."


class InvalidAmountError(ValidationError):
    default_message = "Invalid amount."


class MissingEmailError(ValidationError):
    default_message = "Email is required."


class InvalidPayloadError(ValidationError):
    default_message = "Invalid request body."


class AmountMismatchError(ValidationError):
    default_message = "Amount does not match the selected registration."


class ConfigurationError(RegistrationError):
    status_code = 500
    default_message = "Payment system not configured."


class UpstreamError(RegistrationError):
    status_code = 400
    default_message = "Payment request rejected."


class ProcessorUnavailableError(RegistrationError):
    status_code = 500
    default_message = "Payment processor unavailable. Please try again."


class SignatureError(RegistrationError):
    status_code = 400
    default_message = "Invalid signature"
