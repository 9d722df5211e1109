# Wizard step constants

# Screen: Greeting / Entry point
# Carries: nothing (initial state, and the landing spot after a reset)
LANDING = "LANDING"

# Screen: Selami Details
# Carries: payerName, amount, message (only screen with editable inputs)
FORM = "FORM"

# Screen: Pay with wallet
# Carries: receiver identifier (copyable) and amount to pay
PAYMENT = "PAYMENT"

# Screen: Send Money instructions / Payment pending
# Entered after the wallet deep link is fired; lateral loop back to PAYMENT
INSTRUCTIONS = "INSTRUCTIONS"

# Screen: Eid card / Acknowledgment
# Terminal but restartable (reset returns to LANDING)
SUCCESS = "SUCCESS"

STEPS = (LANDING, FORM, PAYMENT, INSTRUCTIONS, SUCCESS)

INITIAL_STEP = LANDING

# Strictly linear funnel with one lateral loop (PAYMENT <-> INSTRUCTIONS).
# No FORM -> LANDING edge and no skip edges.
TRANSITIONS = {
    LANDING: {FORM},
    FORM: {PAYMENT},
    PAYMENT: {INSTRUCTIONS, FORM, SUCCESS},
    INSTRUCTIONS: {PAYMENT, SUCCESS},
    SUCCESS: {LANDING},
}

# Steps from which the payer may self-report a completed transfer
CONFIRMABLE_STEPS = (PAYMENT, INSTRUCTIONS)


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, set())
