import asyncio
import logging
import traceback

from config.settings import get_settings
from models.steps import WizardStep
from orchestrator.controller import WizardController
from orchestrator.exceptions import WizardError, UnsupportedCapability
from state import DocumentMethod
from tools.capture_tools import document_file_name, press_keypad
from tools.connectivity import ConnectivitySignal
from tools.voice import ConsoleVoice

METHOD_CHOICES = {
    "1": DocumentMethod.DIGITAL_LOCKER,
    "2": DocumentMethod.NATIONAL_ID_NUMBER,
    "3": DocumentMethod.FACE_CAPTURE,
}

HELP_TEXT = (
    "Commands: next | back-to-start | restart | hear | online | offline | exit\n"
    "Splash: start | help | close | lang | name <your name>\n"
    "Method: 1 (Digilocker) | 2 (Aadhaar) | 3 (Face)\n"
    "Digilocker: file <path>   Aadhaar: digits, or a single 0-9 key, or 'clear'   Face: capture\n"
    "Question screen: ask <question> | listen"
)

def render(controller: WizardController) -> None:
    view = controller.screen()
    print("\n" + "-" * 35)
    print(f"{view.connectivity_badge}   progress {view.progress}/{view.progress_max}")
    print(f"[{view.step}] {view.title}")
    print(view.body)
    if view.help_title:
        print(view.help_title)
    for entry in view.help_entries:
        print(f"  * {entry.question}\n    {entry.answer}")
    if view.assistant_answer:
        print(f"Answer: {view.assistant_answer}")
    if view.notice:
        print(f"Notice: {view.notice}")
    print(f"Actions: {', '.join(view.actions)}")

async def handle(command: str, controller: WizardController, connectivity: ConnectivitySignal) -> None:
    word, _, argument = command.partition(" ")
    step = controller.current_step

    if word == "start":
        controller.advance(WizardStep.METHOD_SELECTION)
    elif word == "help":
        controller.open_help()
    elif word == "close":
        controller.close_help()
    elif word == "lang":
        controller.toggle_language()
    elif word == "name":
        controller.record_name(argument)
    elif word in METHOD_CHOICES and step == WizardStep.METHOD_SELECTION:
        controller.select_method(METHOD_CHOICES[word])
    elif word == "file":
        controller.record_identifier(document_file_name(argument))
    elif word == "clear":
        controller.clear_identifier()
    elif word.isdigit() and step == WizardStep.NATIONAL_ID_ENTRY:
        if len(word) == 1:
            controller.record_identifier(press_keypad(controller.record.document_identifier, word))
        else:
            controller.record_identifier(word)
    elif word == "capture":
        controller.capture_face()
    elif word == "hear":
        controller.hear_instructions()
    elif word == "next":
        targets = sorted(controller.descriptor.next_steps)
        if len(targets) != 1:
            print("Choose where to go: " + ", ".join(str(int(t)) for t in targets))
            return
        controller.advance(targets[0])
    elif word == "restart" or word == "back-to-start":
        controller.restart()
    elif word == "ask":
        controller.ask(argument)
    elif word == "listen":
        await controller.listen_for_query()
        if controller.assistant_query:
            controller.ask()
    elif word == "online":
        connectivity.set_online(True)
    elif word == "offline":
        connectivity.set_online(False)
    else:
        print(HELP_TEXT)

async def main():
    """
    Runs the KYC wizard as a command-line interface.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    print(f"--- {settings.app_name} ---")
    print("Type 'exit' or 'quit' to end.")
    print(HELP_TEXT)

    connectivity = ConnectivitySignal(online=settings.initially_online)
    controller = WizardController(ConsoleVoice(), connectivity, settings=settings)

    while True:
        render(controller)
        try:
            command = input("You: ").strip()
            if command.lower() in ["exit", "quit"]:
                break
            if not command:
                continue
            await handle(command, controller, connectivity)

        except UnsupportedCapability as e:
            print(f"\n{e.notice}\n")
        except WizardError as e:
            print(f"\nNot possible here: {e}\n")
        except KeyboardInterrupt:
            print("\n\nConversation ended. Goodbye!")
            break
        except Exception:
            print("\n--- An unexpected error occurred ---")
            traceback.print_exc()
            print("-" * 35)

    controller.close()

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception as e:
        print(f"Failed to start the application: {e}")
