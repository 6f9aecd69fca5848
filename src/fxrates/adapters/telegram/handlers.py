# src/fxrates/adapters/telegram/handlers.py
"""
Telegram Handlers - Command Processing and User Interaction

This module contains the bot's command handlers: /start, /currencies,
/convert and /status. Handlers validate user input, run the blocking rate
operations in a worker thread and map domain errors to short replies.

Files that USE this module:
- fxrates.app (build_handlers function creates handler instances)

Files that this module USES:
- fxrates.application.exchange_service (ExchangeService for currencies/convert)
- fxrates.application.snapshot_store (RateSnapshotStore.status for /status)
- fxrates.adapters.formatting.formatter (all reply formatting)
- fxrates.shared.validators (amount and currency code parsing)
- fxrates.domain.errors (error taxonomy)
"""
from __future__ import annotations

import asyncio
import logging
from functools import partial

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from fxrates.adapters.formatting.formatter import (
    USAGE,
    format_conversion,
    format_currencies,
    format_status,
)
from fxrates.application.exchange_service import ExchangeService
from fxrates.application.snapshot_store import RateSnapshotStore
from fxrates.domain.errors import (
    InvalidAmountError,
    InvalidCurrencyError,
    RefreshFailedError,
    StorageUnavailableError,
)
from fxrates.shared.validators import parse_amount, sanitize_user_input, validate_currency_code

logger = logging.getLogger(__name__)

UNAVAILABLE_REPLY = "⚠️ Exchange rates are temporarily unavailable. Please try again later."


# --- /start, /help ---
async def start_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(USAGE)


# --- /currencies ---
async def currencies_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE,
                         service: ExchangeService) -> None:
    """Handle /currencies - list all currency codes in the current snapshot."""
    try:
        codes = await asyncio.to_thread(service.list_currencies)
    except (RefreshFailedError, StorageUnavailableError) as e:
        logger.warning("/currencies failed: %s", e)
        await update.message.reply_text(UNAVAILABLE_REPLY)
        return

    await update.message.reply_text(format_currencies(codes))


# --- /convert <amount> <FROM> <TO> ---
async def convert_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE,
                      service: ExchangeService) -> None:
    """
    Handle /convert - convert an amount between two currencies.

    Usage: /convert 10 EUR JPY
    """
    args = context.args or []
    if len(args) != 3:
        await update.message.reply_text("Usage: /convert <amount> <FROM> <TO>")
        return

    raw_amount, src, dst = args
    amount = parse_amount(raw_amount)
    if amount is None:
        await update.message.reply_text(f"'{sanitize_user_input(raw_amount)}' is not a number.")
        return

    for code in (src, dst):
        if not validate_currency_code(code):
            await update.message.reply_text(f"'{sanitize_user_input(code)}' is not a currency code.")
            return

    try:
        result = await asyncio.to_thread(service.convert, src, dst, amount)
    except InvalidAmountError:
        await update.message.reply_text("Amount must be greater than 0.")
        return
    except InvalidCurrencyError as e:
        await update.message.reply_text(f"Unknown currency: {e.code}. See /currencies.")
        return
    except (RefreshFailedError, StorageUnavailableError) as e:
        logger.warning("/convert failed: %s", e)
        await update.message.reply_text(UNAVAILABLE_REPLY)
        return

    await update.message.reply_text(format_conversion(amount, result))


# --- /status ---
async def status_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE,
                     store: RateSnapshotStore) -> None:
    """Handle /status - show the held snapshot date without refreshing."""
    await update.message.reply_text(format_status(store.status()))


def build_handlers(service: ExchangeService, store: RateSnapshotStore):
    """
    Build and return list of Telegram bot handlers.

    Args:
        service: ExchangeService used by /currencies and /convert
        store: RateSnapshotStore used by /status

    Returns:
        List of handler instances for registration with bot
    """
    return [
        CommandHandler(["start", "help"], start_cmd),
        CommandHandler("currencies", partial(currencies_cmd, service=service)),
        CommandHandler("convert", partial(convert_cmd, service=service)),
        CommandHandler("status", partial(status_cmd, store=store)),
    ]
