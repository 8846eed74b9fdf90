import argparse
import asyncio
import sys
from typing import Optional, Sequence

from .config import load_app_config, resolve_token
from .errors import ConfigurationError, GistError
from .files import must_collect_files
from .gist import Gister, SubmissionConfig
from .messages import GistResponse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gist",
        usage="gist [options] file...",
        description="Upload files to GitHub as a gist and print its URL.",
    )
    parser.add_argument("files", nargs="+", metavar="file", help="Files to upload.")
    parser.add_argument("--anonymous", action="store_true", default=None, help="Create the gist without credentials.")
    parser.add_argument("--public", action="store_true", default=None, help="Create a public gist.")
    parser.add_argument("--description", type=str, default="", help="Description for the gist.")
    parser.add_argument("--update", type=str, default="", help="Id of an existing gist to update.")
    parser.add_argument("--config", type=str, default=None, help="File holding the username:token credentials.")
    return parser


async def run(args: argparse.Namespace) -> GistResponse:
    cfg = load_app_config(args.config)
    anonymous = cfg.defaults.anonymous if args.anonymous is None else args.anonymous
    public = cfg.defaults.public if args.public is None else args.public

    if anonymous and not public:
        raise ConfigurationError("incompatible: private and anonymous")

    try:
        token = resolve_token(cfg)
    except OSError as e:
        if not anonymous:
            raise ConfigurationError(f"no token. {cfg.token_file}: {e.strerror or e}") from e
        token = ""

    files = await must_collect_files(args.files)

    submission = (
        SubmissionConfig()
        .with_anonymous(anonymous)
        .with_files(files)
        .with_credentials(token)
        .with_description(args.description)
        .with_public(public)
        .with_update(args.update)
    )
    gister = Gister(submission, api_url=cfg.api.url, user_agent=cfg.api.user_agent)
    return await gister.send()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        response = asyncio.run(run(args))
    except GistError as e:
        sys.exit(str(e))
    print(response.html_url)


if __name__ == "__main__":
    main()
