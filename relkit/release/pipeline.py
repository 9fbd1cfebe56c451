"""Release pipeline.

Stages run strictly in order:

    idle -> precondition_check -> version_computed -> files_synced
         -> archives_built -> committed_tagged -> published -> notified -> done

Any stage may fail, which aborts the run. Nothing is rolled back: a failure
after files were rewritten leaves the working tree modified, a failed push
leaves the local release commit and tag behind, and a failure while
publishing leaves the pushed commit and tag in place. The operator is told
which of these happened.

A test version (one with a suffix such as ``1.2.3-test``) runs the local
stages only; commit, tag, push, publish and the browser step are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

from relkit.core.config import ReleaseConfig
from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.release.archive import archive_specs, build_archive
from relkit.release.contracts import Notifier, ReleaseHost, VersionControl
from relkit.release.errors import ReleaseError
from relkit.release.fsm import FINISH, StepHandler, StepOutcome, advance, run_state_machine
from relkit.release.manifest import (
    Manifest,
    manifest_version,
    read_manifest,
    write_manifest_version,
)
from relkit.release.model import PublishOutput, SyncOutcome
from relkit.release.notes import commit_message, release_edit_url, release_notes, release_title
from relkit.release.semver import ReleaseIntent, SemanticVersion, bump
from relkit.release.sync import sync_all, verify_consistency, versioned_files


class Stage(StrEnum):
    IDLE = "idle"
    PRECONDITION_CHECK = "precondition_check"
    VERSION_COMPUTED = "version_computed"
    FILES_SYNCED = "files_synced"
    ARCHIVES_BUILT = "archives_built"
    COMMITTED_TAGGED = "committed_tagged"
    PUBLISHED = "published"
    NOTIFIED = "notified"
    DONE = "done"
    FAILED = "failed"


_STAGE_ORDER: tuple[Stage, ...] = tuple(Stage)


@dataclass(frozen=True, slots=True)
class Collaborators:
    vcs: VersionControl
    host: ReleaseHost
    notifier: Notifier


@dataclass(frozen=True, slots=True)
class ReleaseRun:
    """State of one run; each stage produces a new instance."""

    root: Path
    config: ReleaseConfig
    intent: ReleaseIntent
    stage: Stage = Stage.IDLE
    version: SemanticVersion | None = None
    manifest: Manifest | None = None
    synced: tuple[SyncOutcome, ...] = ()
    archives: tuple[Path, ...] = ()
    published: PublishOutput | None = None
    trace: tuple[Stage, ...] = (Stage.IDLE,)
    skipped: tuple[Stage, ...] = ()

    @property
    def tag(self) -> str:
        return self.require_version().to_tag()

    @property
    def dry_run(self) -> bool:
        return self.version is not None and self.version.is_dry_run

    def require_version(self) -> SemanticVersion:
        if self.version is None:
            raise AssertionError(f"version not computed at stage {self.stage}")
        return self.version

    def enter(self, stage: Stage, **changes: object) -> ReleaseRun:
        trace = (*self.trace, stage)
        return replace(self, stage=stage, trace=trace, **changes)  # type: ignore[arg-type]

    def skip(self, stage: Stage) -> ReleaseRun:
        return replace(self.enter(stage), skipped=(*self.skipped, stage))


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    version: SemanticVersion
    tag: str
    dry_run: bool
    synced: tuple[SyncOutcome, ...]
    archives: tuple[Path, ...]
    published: PublishOutput | None
    stages: tuple[Stage, ...]
    skipped: tuple[Stage, ...]


type _Step = Result[StepOutcome[ReleaseRun], ReleaseError]


class ReleasePipeline:
    """Sequence the release stages against injected collaborators."""

    def __init__(self, *, deps: Collaborators, console: ConsoleProtocol) -> None:
        self._deps = deps
        self._console = console
        # Git steps of the current run that succeeded, for the failure report.
        self._vcs_done: list[str] = []

    def run(
        self, *, root: Path, config: ReleaseConfig, intent: ReleaseIntent
    ) -> Result[ReleaseOutcome, ReleaseError]:
        initial = ReleaseRun(root=root, config=config, intent=intent)
        self._vcs_done = []
        last = [initial]

        def on_advance(state: ReleaseRun) -> None:
            last[0] = state
            self._console.print(f"stage: {state.stage}", Style.DIM)

        handlers: dict[str, StepHandler[ReleaseRun]] = {
            Stage.IDLE: self._check_preconditions,
            Stage.PRECONDITION_CHECK: self._compute_version,
            Stage.VERSION_COMPUTED: self._sync_files,
            Stage.FILES_SYNCED: self._build_archives,
            Stage.ARCHIVES_BUILT: self._commit_and_tag,
            Stage.COMMITTED_TAGGED: self._publish,
            Stage.PUBLISHED: self._notify,
            Stage.NOTIFIED: self._finish,
            Stage.DONE: lambda _run: Ok(FINISH),
        }

        result = run_state_machine(
            initial_state=initial,
            get_step=lambda r: str(r.stage),
            handlers=handlers,
            on_advance=on_advance,
        )
        if isinstance(result, Err):
            self._console.print(f"stage: {Stage.FAILED}", Style.DIM)
            self._report_leftovers(last[0])
            return result

        final = result.value
        return Ok(
            ReleaseOutcome(
                version=final.require_version(),
                tag=final.tag,
                dry_run=final.dry_run,
                synced=final.synced,
                archives=final.archives,
                published=final.published,
                stages=final.trace,
                skipped=final.skipped,
            )
        )

    def _check_preconditions(self, run: ReleaseRun) -> _Step:
        clean = self._deps.vcs.status_is_clean()
        if isinstance(clean, Err):
            return clean
        if not clean.value:
            return Err(
                ReleaseError(
                    kind="dirty_working_tree",
                    message="repository has uncommitted changes",
                    hint="Commit or stash them before releasing.",
                )
            )
        self._console.print("git state is clean", Style.DIM)
        return Ok(advance(run.enter(Stage.PRECONDITION_CHECK)))

    def _compute_version(self, run: ReleaseRun) -> _Step:
        intent = run.intent
        if intent.kind == "literal":
            computed = bump(None, intent)
            if isinstance(computed, Err):
                return computed
            self._console.info(f"using test version {computed.value}")
            return Ok(advance(run.enter(Stage.VERSION_COMPUTED, version=computed.value)))

        manifest = read_manifest(run.root / run.config.manifest)
        if isinstance(manifest, Err):
            return manifest
        current = manifest_version(manifest.value)
        if isinstance(current, Err):
            return current
        computed = bump(current.value, intent)
        if isinstance(computed, Err):
            return computed

        self._console.info(f"bumping {intent.kind}: {current.value} -> {computed.value}")
        return Ok(
            advance(
                run.enter(
                    Stage.VERSION_COMPUTED, version=computed.value, manifest=manifest.value
                )
            )
        )

    def _sync_files(self, run: ReleaseRun) -> _Step:
        version = run.require_version()

        if not version.is_dry_run or run.config.persist_test_version:
            manifest = run.manifest
            if manifest is None:
                read = read_manifest(run.root / run.config.manifest)
                if isinstance(read, Err):
                    return read
                manifest = read.value
            written = write_manifest_version(manifest, version)
            if isinstance(written, Err):
                return written
            self._console.print(f"{run.config.manifest} version set to {version}", Style.DIM)

        files = versioned_files(root=run.root, config=run.config)
        outcomes = sync_all(files, version, console=self._console)
        if isinstance(outcomes, Err):
            return outcomes

        consistent = verify_consistency(files, version)
        if isinstance(consistent, Err):
            return consistent

        return Ok(advance(run.enter(Stage.FILES_SYNCED, synced=tuple(outcomes.value))))

    def _build_archives(self, run: ReleaseRun) -> _Step:
        version = run.require_version()
        specs = archive_specs(
            root=run.root,
            source_dir=run.config.source_dir,
            dist_dir=run.config.dist_dir,
            names=(
                run.config.pinned_archive_name(str(version)),
                run.config.stable_archive_name,
            ),
        )

        built: list[Path] = []
        for spec in specs:
            result = build_archive(spec)
            if isinstance(result, Err):
                return result
            self._console.print(f"zip created: {result.value}", Style.DIM)
            built.append(result.value)

        return Ok(advance(run.enter(Stage.ARCHIVES_BUILT, archives=tuple(built))))

    def _commit_and_tag(self, run: ReleaseRun) -> _Step:
        if run.dry_run:
            self._console.info("test version: skipping commit, tag and push")
            return Ok(advance(run.skip(Stage.COMMITTED_TAGGED)))

        vcs = self._deps.vcs
        tag = run.tag
        for name, step in (
            ("commit", lambda: vcs.commit_all(commit_message(tag))),
            ("tag", lambda: vcs.tag(tag)),
            ("push", lambda: vcs.push(include_tags=True)),
        ):
            result = step()
            if isinstance(result, Err):
                return result
            self._vcs_done.append(name)

        self._console.print(f"committed, tagged and pushed {tag}", Style.DIM)
        return Ok(advance(run.enter(Stage.COMMITTED_TAGGED)))

    def _publish(self, run: ReleaseRun) -> _Step:
        if run.dry_run:
            return Ok(advance(run.skip(Stage.PUBLISHED)))

        tag = run.tag
        self._console.print(f"publishing release {tag}", Style.DIM)
        result = self._deps.host.create_release(
            tag=tag,
            title=release_title(tag),
            notes=release_notes(tag),
            attachments=list(run.archives),
        )
        if isinstance(result, Err):
            return result

        output = result.value
        text = output.stderr.strip() or output.stdout.strip()
        if text:
            self._console.print(text, Style.DIM)
        return Ok(advance(run.enter(Stage.PUBLISHED, published=output)))

    def _notify(self, run: ReleaseRun) -> _Step:
        if run.dry_run:
            return Ok(advance(run.skip(Stage.NOTIFIED)))

        url = release_edit_url(run.config.repo, run.tag)
        self._console.print(f"opening {url}", Style.DIM)
        opened = self._deps.notifier.open_release_page(url)
        if isinstance(opened, Err):
            # Cosmetic step: never fails the release.
            self._console.warning(opened.error.pretty())
        return Ok(advance(run.enter(Stage.NOTIFIED)))

    def _finish(self, run: ReleaseRun) -> _Step:
        if run.dry_run:
            self._console.success(f"test release {run.tag} built (nothing published)")
        else:
            self._console.success(f"released {run.tag}")
        return Ok(advance(run.enter(Stage.DONE)))

    def _report_leftovers(self, last: ReleaseRun) -> None:
        reached = _STAGE_ORDER.index(last.stage)
        if reached >= _STAGE_ORDER.index(Stage.COMMITTED_TAGGED) and not last.dry_run:
            self._console.warning(
                f"{last.tag} was committed, tagged and pushed but not published; "
                "publish it manually or delete the tag"
            )
        elif "tag" in self._vcs_done:
            self._console.warning(
                f"release commit and tag {last.tag} exist locally but were not pushed; "
                f"run `git push && git push --tags`, or remove them with "
                f"`git tag -d {last.tag}` and `git reset --soft HEAD~1`"
            )
        elif "commit" in self._vcs_done:
            self._console.warning(
                f"release commit for {last.tag} exists locally but was not tagged; "
                "tag and push it by hand, or undo it with `git reset --soft HEAD~1`"
            )
        elif reached >= _STAGE_ORDER.index(Stage.VERSION_COMPUTED):
            self._console.warning(
                "working tree may have been modified and is not rolled back; "
                "review with `git status` and revert with `git checkout -- .` if needed"
            )


def run_release(
    *,
    root: Path,
    config: ReleaseConfig,
    intent: ReleaseIntent,
    deps: Collaborators,
    console: ConsoleProtocol,
) -> Result[ReleaseOutcome, ReleaseError]:
    pipeline = ReleasePipeline(deps=deps, console=console)
    return pipeline.run(root=root, config=config, intent=intent)
