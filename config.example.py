# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets (API keys, bot tokens). Keep them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "SB_APP_NAME": "App display name (default: SwitchBuddy).",
    "SB_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Identity
    "SB_USER_ID": "Acting user id for the console (default: local). Empty => read-only, writes are refused.",
    # Connectors
    "SB_CONSOLE_ENABLED": "Enable console REPL (true/false, default: true).",
    # AI (OpenAI-compatible endpoint)
    "SB_LLM_API_KEY": "API key for the AI flows (GEMINI_API_KEY is accepted too). Without it AI commands are disabled.",
    "SB_LLM_BASE_URL": "OpenAI-compatible base URL (default: Gemini's OpenAI endpoint).",
    "SB_LLM_MODELS": "Comma/space separated list of models to try in order.",
    "SB_LLM_CONNECT_TIMEOUT_SECONDS": "Connect timeout per request (default: 5).",
    "SB_LLM_READ_TIMEOUT_SECONDS": "Read timeout per request (default: 60).",
    # Debrief channels
    "SB_TELEGRAM_BOT_TOKEN": "Telegram bot token for the daily debrief.",
    "SB_TELEGRAM_CHAT_ID": "Telegram chat id that receives the debrief.",
    "SB_WHATSAPP_WEBHOOK_URL": "WhatsApp gateway webhook; receives {to, text} as JSON.",
    "SB_WHATSAPP_RECIPIENT": "Recipient passed to the WhatsApp gateway.",
    # Debrief scheduler
    "SB_DEBRIEF_ENABLED": "Run the daily debrief automatically (true/false, default: false).",
    "SB_DEBRIEF_HOUR": "Local hour of the debrief (default: 21).",
    "SB_DEBRIEF_MINUTE": "Local minute of the debrief (default: 0).",
    "SB_DEBRIEF_INTERVAL_SECONDS": "How often the scheduler checks the clock (default: 60).",
    # Paths (gitignored)
    "SB_DATA_DIR": "Local data directory (default: .local/switchbuddy).",
    "SB_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "SB_REWARDS_DB_PATH": "RewardStore SQLite path (default: <data_dir>/rewards.sqlite3).",
    "SB_JOBS_DB_PATH": "JobApplicationStore SQLite path (default: <data_dir>/jobs.sqlite3).",
    "SB_CAREER_DB_PATH": "Interview plans, market searches and lesson chats, SQLite (default: <data_dir>/career.sqlite3).",
    "SB_DEBRIEF_STATE_PATH": "Last debrief run date, JSON (default: <data_dir>/debrief_state.json).",
}
