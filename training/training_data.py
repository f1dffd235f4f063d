"""
Labeled utterances for every intent.
Used to check rule priority whenever the classifier table changes.
"""

TRAINING_DATA = [
    # ── Create ──
    {"utterance": "Create order 2 boxes of mangoes for Ravi",       "intent": "create_order"},
    {"utterance": "create an order for 5 chairs",                   "intent": "create_order"},
    {"utterance": "Place order: 10 bags of cement to Andheri",      "intent": "create_order"},
    {"utterance": "new order, one fridge, pickup at 6 pm",          "intent": "create_order"},
    {"utterance": "add order for a sofa",                           "intent": "create_order"},
    {"utterance": "I want to order 3 tables",                       "intent": "create_order"},

    # ── Track ──
    {"utterance": "track order ORD-LX3K9ABC123",                    "intent": "track_order", "tracking_id": "ORD-LX3K9ABC123"},
    {"utterance": "Track ord-abc123",                               "intent": "track_order", "tracking_id": "ORD-ABC123"},
    {"utterance": "track my order ORD-XYZ",                         "intent": "track_order", "tracking_id": "ORD-XYZ"},
    {"utterance": "Where is order ORD-Q1W2E3?",                     "intent": "track_order", "tracking_id": "ORD-Q1W2E3"},

    # ── Next pickup ──
    {"utterance": "What's my next pickup?",                         "intent": "next_pickup"},
    {"utterance": "what is my next pickup",                         "intent": "next_pickup"},
    {"utterance": "When is the next delivery",                      "intent": "next_pickup"},
    {"utterance": "next order please",                              "intent": "next_pickup"},

    # ── List ──
    {"utterance": "Show my orders",                                 "intent": "list_orders"},
    {"utterance": "list orders",                                    "intent": "list_orders"},
    {"utterance": "what are my recent orders",                      "intent": "list_orders"},

    # ── Cancel / delete ──
    {"utterance": "Cancel order ORD-ABC123",                        "intent": "cancel_order"},
    {"utterance": "please cancel order",                            "intent": "cancel_order"},
    {"utterance": "delete order ORD-ABC123",                        "intent": "delete_order"},
    {"utterance": "remove order ORD-ABC123",                        "intent": "delete_order"},

    # ── Address ──
    {"utterance": "Update address of ORD-ABC123 to MG Road, Pune",  "intent": "update_address"},
    {"utterance": "add address for ORD-ABC123: 12 Park Street",     "intent": "update_address"},

    # ── Update ──
    {"utterance": "update ORD-ABC123 add juice and status shipped", "intent": "update_order"},
    {"utterance": "change ORD-ABC123 pickup to 5 pm",               "intent": "update_order"},
    {"utterance": "modify ORD-ABC123 assign to Kiran",              "intent": "update_order"},

    # ── General ──
    {"utterance": "How is the weather today?",                      "intent": "general"},
    {"utterance": "hello",                                          "intent": "general"},
    {"utterance": "what does a porter do",                          "intent": "general"},
]
