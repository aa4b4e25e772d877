"""User-facing reply texts shared by the processor and command handler."""

SERVICE_NAME = "Linkara.xyz"
API_KEY_PAGE = "https://linkara.xyz/member/tools/api"

WELCOME = f"""🔗 Welcome to URL Shortener Bot!

I help you shorten URLs instantly using the {SERVICE_NAME} API.

✨ Available Commands:
• /start – Show this welcome message
• /api <your-api-key> – Set your {SERVICE_NAME} API key
• /remove – Forget your stored API key
• /balance – Check your account balance
• /stats – Show how many URLs you have shortened
• /help – Show help information

🚀 How to Get Started:
1️⃣ Get your API key from {API_KEY_PAGE}
2️⃣ Set it using the /api command
3️⃣ Send me any message with URLs – I'll shorten them automatically 🎯

💡 The bot keeps your original message structure while replacing URLs with shortened versions."""

HELP = f"""📚 Help - URL Shortener Bot

✨ Commands:
• /start – Welcome message and setup instructions
• /api <your-api-key> – Set your {SERVICE_NAME} API key
• /remove – Forget your stored API key
• /balance – Check your account balance
• /stats – Show how many URLs you have shortened
• /help – Show this help message

⚙️ Usage:
1️⃣ Set your API key: /api your-api-key-here
2️⃣ Send any message containing URLs
3️⃣ Bot will reply with the same message but with shortened URLs

🔑 Need an API key? Get it here 👉 {API_KEY_PAGE}"""

API_KEY_USAGE = "❌ Please provide a valid API key.\nUsage: /api your-api-key"
API_KEY_SAVED = "✅ API key set successfully! You can now send messages with URLs to shorten them."
API_KEY_SAVE_FAILED = "❌ Error storing API key. Please try again."
API_KEY_REMOVED = "✅ API key removed. Use /api to set a new one."
API_KEY_NOT_SET = "ℹ️ You don't have an API key stored."
MISSING_API_KEY = "❌ Please set your API key first using /api command.\nExample: /api your-api-key"

NOTHING_SHORTENED = "❌ No URLs could be shortened. Please check your message and API key."
PROCESSING_FAILED = "❌ Error processing URLs. Please try again or check your API key."

BALANCE_UNAVAILABLE = "❌ Unable to fetch balance. Please check your API key."
BALANCE_FAILED = "❌ Error fetching balance. Please try again or check your API key."

STATS_EMPTY = "📊 No URLs shortened yet. Send me a message with links to get started."

CALLBACK_MISSING_API_KEY = "Please set your API key first using /api command"
CALLBACK_BALANCE_FAILED = "Error fetching balance data"
CALLBACK_FAILED = "Error processing request"
CALLBACK_UNKNOWN = "Unknown action"
