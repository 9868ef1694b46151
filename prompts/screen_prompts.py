"""
Screen text and voice prompts for the KYC wizard.
These strings are shown on screen and passed to the voice adapter for playback.
"""

# --- Screen titles ---
SPLASH_TITLE = "👋"
METHOD_SELECTION_TITLE = "Choose KYC Method"
DIGITAL_LOCKER_TITLE = "Digilocker KYC"
NATIONAL_ID_TITLE = "Aadhaar KYC"
FACE_CAPTURE_TITLE = "Face KYC"
COMPLETION_TITLE = "✅ KYC Verification Complete!"
CONNECTIVITY_TITLE = "Offline Notification"
ASSISTANT_TITLE = "Ask a Question"
HELP_TITLE = "Help & FAQ"

# --- Screen bodies ---
SPLASH_BODY = "Tap Start KYC to begin. You can change the language or open help first."
METHOD_SELECTION_BODY = "Digilocker, Aadhaar or Face. Tap an icon to proceed."
DIGITAL_LOCKER_BODY = "Upload your document as an image or PDF."
NATIONAL_ID_BODY = "Enter your 12 digit Aadhaar number."
FACE_CAPTURE_BODY = "Align your face in the outline."
COMPLETION_BODY = "Congratulations! Your KYC process is finished."
ASSISTANT_BODY = "Type or speak your question."

OFFLINE_MESSAGE = "You are offline. Images and data will be saved locally and uploaded when online."
ONLINE_MESSAGE = "You are online. Data will be uploaded."

ONLINE_BADGE = "🟢 Online"
OFFLINE_BADGE = "🔴 Offline Mode"

# --- Voice announcements ---
WELCOME_ANNOUNCEMENT = "Welcome! Tap to start KYC."
METHOD_SELECTED_ANNOUNCEMENT = "{method} selected."
DOCUMENT_UPLOADED_ANNOUNCEMENT = "Document uploaded. Proceed to next step."
FACE_CAPTURED_ANNOUNCEMENT = "Face captured!"

METHOD_LABELS = {
    "digilocker": "Digilocker",
    "aadhaar": "Aadhaar",
    "face": "Face",
}

# --- "Hear instructions" prompts ---
METHOD_SELECTION_INSTRUCTIONS = "Choose Digilocker, Aadhaar, or Face for KYC. Tap an icon to proceed."
NATIONAL_ID_INSTRUCTIONS = "Please enter your Aadhaar number using the keypad."
FACE_CAPTURE_INSTRUCTIONS = "Align your face in the outline and tap capture."

# --- Notices ---
VOICE_INPUT_UNSUPPORTED_NOTICE = "Voice input not supported in this browser."
LISTEN_TIMEOUT_NOTICE = "We could not hear you. Please try again or type your question."
