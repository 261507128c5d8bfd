"""
INSTALLWIZ Main Entry Point
===========================
Runs the language and disk encryption steps headless, against the real
system collaborators (localectl, pwscore).

    python main.py --search fran
    python main.py --locale en_US.UTF-8 --select fr_FR.UTF-8
    python main.py --check-passphrase
"""
import argparse
import getpass
import logging
import sys

from PySide6.QtCore import QCoreApplication, QTimer

from core.config import get_call_timeout, get_default_locale, validate_config
from core.logging_config import LoggingConfig
from core.translator import t
from exceptions import InstallwizError
from version import APP_NAME, VERSION

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="installwiz", description=f"{APP_NAME} {VERSION}")
    parser.add_argument("--locale", help="language chosen upstream (default from config)")
    parser.add_argument("--select", metavar="LOCALE", help="apply a locale as if picked by the user")
    parser.add_argument("--search", metavar="TEXT", help="print the language list for a filter")
    parser.add_argument("--check-passphrase", action="store_true", help="score a passphrase interactively")
    parser.add_argument("--timeout", type=int, default=None,
                        help="seconds to wait for backend calls (default INSTALLWIZ_TIMEOUT)")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def print_options(result) -> None:
    if not result:
        print(t(result.label) if hasattr(result, "label") else "")
        return
    for group in result:
        print(group.label)
        for locale in group.locales:
            print(f"    {locale.display_key:<12} {locale.native_name}")


def run_language_step(app: QCoreApplication, args: argparse.Namespace) -> int:
    from services.locale_catalog import LocaleCatalog
    from services.locale_marker import FileLocaleMarker
    from services.locale_sync import LocaleSyncController
    from services.localization_backend import SystemLocalizationBackend
    from services.translation_loader import ModuleTranslationLoader

    backend = SystemLocalizationBackend()
    catalog = LocaleCatalog.from_backend(backend)
    controller = LocaleSyncController(
        catalog=catalog,
        marker=FileLocaleMarker(),
        backend=backend,
        fetch_translation_bundle=ModuleTranslationLoader(),
    )
    status = {"code": 0, "settled": False}

    def finish(code: int = 0) -> None:
        status["settled"] = True
        status["code"] = status["code"] or code
        app.quit()

    def on_notification(error):
        logger.error(f"Language step: {error}")
        finish(1)

    controller.step_notification.connect(on_notification)
    controller.reload_requested.connect(lambda: logger.info("UI reload requested"))
    controller.native_name_changed.connect(lambda name: print(f"{t('Chosen language: ')}{name}"))

    if args.search is not None:
        controller.set_search_filter(args.search)
        print_options(controller.options())
        return 0

    if args.select and catalog.lookup(args.select) is None:
        logger.error(f"Unknown locale: {args.select}")
        return 2

    if args.select:
        controller.language_applied.connect(lambda _locale: finish())
    else:
        controller.mount_confirmed.connect(lambda _locale: finish())

    controller.mount(args.locale or get_default_locale())

    if args.select:
        status["settled"] = False
        if not controller.select_locale(args.select):
            # marker failure, already reported through step_notification
            return status["code"] or 1

    if not status["settled"]:
        QTimer.singleShot((args.timeout or get_call_timeout()) * 1000, app.quit)
        app.exec()
    controller.close()

    if not status["settled"]:
        logger.error("Language step timed out waiting for the backend")
        return 1
    return status["code"]


def run_passphrase_step(app: QCoreApplication, args: argparse.Namespace) -> int:
    from services.passphrase_validation import PassphraseValidationController
    from services.quality_oracle import PwscoreOracle

    controller = PassphraseValidationController(
        score_password=PwscoreOracle(),
        show_passphrase_screen=True,
    )
    password = getpass.getpass("Passphrase: ")
    confirm = getpass.getpass("Confirm passphrase: ")

    controller.quality_settled.connect(app.quit)
    controller.start()
    controller.set_password(password)
    controller.set_confirm_password(confirm)

    if controller.is_pending:
        QTimer.singleShot((args.timeout or get_call_timeout()) * 1000, app.quit)
        app.exec()
    controller.close()

    level = controller.strength
    print(f"{t('Must be at least 8 characters')}: {controller.rule_length.value}")
    print(f"{t('Passphrases must match')}: {controller.rule_match.value}")
    print(f"strength: {t(level.label) if level else 'unknown'}")
    print(f"valid: {controller.form_valid}")
    return 0 if controller.form_valid else 1


def main(argv=None) -> int:
    args = parse_args(argv)

    LoggingConfig.setup_logging(args.log_level)
    LoggingConfig.cleanup_old_logs()

    try:
        validate_config()
    except InstallwizError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    logger.info(f"{APP_NAME} {VERSION} starting")

    try:
        if args.check_passphrase:
            return run_passphrase_step(app, args)
        return run_language_step(app, args)
    except InstallwizError as e:
        logger.error(f"{APP_NAME} failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
