"""CLI entrypoint for the Cea chat client and TTS proxy."""

from __future__ import annotations

import asyncio

import typer
from rich import print
from rich.text import Text

from cea_chat.completion import CompletionClient
from cea_chat.config import Settings, settings
from cea_chat.conversation import ConversationStore
from cea_chat.session import ChatSession
from cea_chat.telemetry import configure_logging
from cea_chat.view import ConsoleView
from cea_chat.voice import (
    LocalSynthesisCapability,
    ProxySpeechClient,
    SpeechInputAdapter,
    SpeechOutputAdapter,
    SpeechRecognitionCapability,
    UnavailableRecognition,
    UnavailableSynthesis,
    VoiceCatalog,
    select_voice,
)

app = typer.Typer(help="Cea conversational client and text-to-speech proxy")

QUIT_COMMANDS = {"/quit", "/exit"}
MIC_COMMAND = "/mic"
VOICES_COMMAND = "/voices"


def _build_recognition(cfg: Settings, use_mic: bool) -> SpeechRecognitionCapability:
    if not use_mic:
        return UnavailableRecognition(reason="Voice input disabled with --no-mic")
    try:
        from cea_chat.voice.stt_speechrecognition import SpeechRecognitionEngine

        return SpeechRecognitionEngine(language=cfg.speech_language, phrase_time_limit=cfg.phrase_time_limit)
    except RuntimeError as exc:
        return UnavailableRecognition(reason=str(exc))


def _build_local_synthesis() -> LocalSynthesisCapability:
    try:
        from cea_chat.voice.tts_pyttsx3 import Pyttsx3LocalSynthesizer

        return Pyttsx3LocalSynthesizer()
    except RuntimeError:
        return UnavailableSynthesis()


def _build_speech_output(remote: ProxySpeechClient) -> SpeechOutputAdapter:
    from cea_chat.voice.playback import SubprocessAudioPlayer

    local = _build_local_synthesis()
    return SpeechOutputAdapter(
        remote=remote,
        player=SubprocessAudioPlayer(),
        local=local,
        catalog=VoiceCatalog(local.list_voices),
    )


async def _chat_loop(view: ConsoleView, cfg: Settings, *, speak: bool, use_mic: bool) -> None:
    completion = CompletionClient(url=cfg.completion_url, model=cfg.completion_model, api_key=cfg.groq_api_key)
    remote = ProxySpeechClient(cfg.tts_proxy_url)
    speech_output = _build_speech_output(remote) if speak else None
    session = ChatSession(
        store=ConversationStore(cfg.system_prompt),
        client=completion,
        notifier=view,
        speech_output=speech_output,
        on_state_changed=view.render,
    )
    speech_input = SpeechInputAdapter(
        _build_recognition(cfg, use_mic),
        session.handle_transcript,
        on_listening_changed=session.set_listening,
    )
    session.attach_speech_input(speech_input)

    view.banner()
    hint = f"Type a message and press Enter. {MIC_COMMAND} for voice input, {VOICES_COMMAND} to rescan voices, /quit to exit."
    view.console.print(Text(hint, style="dim"))
    try:
        while True:
            line = await asyncio.to_thread(input, "What's on your mind? ")
            command = line.strip().lower()
            if command in QUIT_COMMANDS:
                break
            if command == VOICES_COMMAND:
                if speech_output is None:
                    view.console.print(Text("Spoken replies are off.", style="dim"))
                else:
                    # pyttsx3 raises no change event, so a rescan is requested by hand.
                    speech_output.catalog.voices_changed()
                    count = len(speech_output.catalog.voices)
                    view.console.print(Text(f"{count} local voice(s) available.", style="dim"))
                continue
            if command == MIC_COMMAND:
                if not await session.start_listening():
                    view.console.print(Text("Voice input is unavailable.", style="dim"))
                continue
            session.set_input(line)
            await session.send_message()
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        if speech_output is not None:
            await speech_output.drain()
        await completion.aclose()
        await remote.aclose()


@app.command()
def start() -> None:
    """Show runtime configuration (credentials are reported as set/unset)."""
    print(
        {
            "app_name": settings.app_name,
            "completion_url": settings.completion_url,
            "completion_model": settings.completion_model,
            "tts_proxy_url": settings.tts_proxy_url,
            "elevenlabs_voice_id": settings.elevenlabs_voice_id,
            "elevenlabs_model_id": settings.elevenlabs_model_id,
            "groq_api_key": "set" if settings.groq_api_key else "missing",
            "elevenlabs_api_key": "set" if settings.elevenlabs_api_key else "missing",
        }
    )


@app.command()
def chat(
    voice: bool = typer.Option(True, "--voice/--no-voice", help="Speak assistant replies"),
    mic: bool = typer.Option(True, "--mic/--no-mic", help="Enable the /mic voice input control"),
) -> None:
    """Run the interactive chat loop."""
    configure_logging(settings.log_level)
    view = ConsoleView(assistant_name=settings.assistant_name)
    asyncio.run(_chat_loop(view, settings, speak=voice and settings.voice_enabled, use_mic=mic))


@app.command()
def serve(
    host: str = typer.Option(None, help="Host to bind the proxy to"),
    port: int = typer.Option(None, help="Port to bind the proxy to"),
) -> None:
    """Run the text-to-speech proxy server."""
    import uvicorn

    from cea_chat.server import create_app

    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=host or settings.server_host,
        port=port or settings.server_port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def voices() -> None:
    """List local synthesis voices and the one the fallback path would use."""
    try:
        from cea_chat.voice.tts_pyttsx3 import Pyttsx3LocalSynthesizer

        local = Pyttsx3LocalSynthesizer()
    except RuntimeError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)

    catalog = VoiceCatalog(local.list_voices)
    available = catalog.voices
    selected = select_voice(available)
    print(
        {
            "voices": [{"name": voice.name, "lang": voice.lang} for voice in available],
            "selected": selected.name if selected else None,
        }
    )


if __name__ == "__main__":
    app()
