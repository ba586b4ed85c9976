import logfire

from musicchain.domain.registry.model.record import License
from musicchain.domain.registry.model.value import RegistrationResult
from musicchain.domain.registry.service.registration import RegistrationFlow
from musicchain.domain.shared.command import Command, CommandHandler, Result


class RegisterSong(Command):
    title: str
    author: str
    content_id: str
    license: str = License.ALL_RIGHTS_RESERVED


class UploadSong(Command):
    filename: str
    content: bytes
    content_type: str
    title: str
    author: str
    license: str = License.ALL_RIGHTS_RESERVED


class SongRegistered(Result):
    registration: RegistrationResult


class RegisterSongHandler(CommandHandler[RegisterSong, SongRegistered]):
    registration: RegistrationFlow

    async def run(self, cmd: RegisterSong) -> SongRegistered:
        with logfire.span("RegisterSong"):
            result = await self.registration.register(
                title=cmd.title,
                author=cmd.author,
                content_id=cmd.content_id,
                license=cmd.license,
            )
            logfire.info(
                "Song registered",
                tx_hash=result.receipt.tx_hash,
                content_id=result.content_id,
            )
            return SongRegistered(registration=result)


class UploadSongHandler(CommandHandler[UploadSong, SongRegistered]):
    registration: RegistrationFlow

    async def run(self, cmd: UploadSong) -> SongRegistered:
        with logfire.span("UploadSong"):
            result = await self.registration.upload_and_register(
                filename=cmd.filename,
                content=cmd.content,
                content_type=cmd.content_type,
                title=cmd.title,
                author=cmd.author,
                license=cmd.license,
            )
            logfire.info(
                "Song uploaded and registered",
                tx_hash=result.receipt.tx_hash,
                content_id=result.content_id,
            )
            return SongRegistered(registration=result)
