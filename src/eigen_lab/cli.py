"""
Command-line interface for Eigen Lab.

Usage:
    eigen-lab eigen 2,1,1,2          Eigenvalues and eigenvectors of a matrix
    eigen-lab diagonalize 2,1,1,2    P, D, P⁻¹ and the staged animation matrix
    eigen-lab presets                Show the preset transformations
    eigen-lab frames 2,1,1,2         Export animation frames as JSON
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from eigen_lab import __version__
from eigen_lab.algorithms import (
    Diagonalization,
    Matrix2D,
    decompose,
    stage_description,
)
from eigen_lab.data import DEFAULT_MATRIX, get_preset, list_presets, parse_matrix
from eigen_lab.visualizations import (
    diagonalization_frames,
    morph_frames,
    scaling_label,
)

app = typer.Typer(
    name="eigen-lab",
    help="Eigenvalues, eigenvectors and diagonalization of 2×2 matrices",
    add_completion=False,
)
console = Console()

MatrixArgument = Annotated[
    str | None,
    typer.Argument(help="Matrix entries as a,b,c,d (row-major)"),
]
PresetOption = Annotated[
    str | None,
    typer.Option("--preset", "-p", help="Use a preset transformation instead"),
]


class FrameMode(str, Enum):
    """Animation exported by the frames command."""

    MORPH = "morph"
    DIAGONALIZE = "diagonalize"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"eigen-lab version {__version__}")
        raise typer.Exit()


def _load_matrix(matrix: str | None, preset: str | None) -> Matrix2D:
    if preset is not None:
        try:
            return get_preset(preset).matrix
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--preset") from e

    if matrix is None:
        return DEFAULT_MATRIX

    parsed = parse_matrix(matrix)
    if parsed is None:
        msg = f"Expected four finite numbers a,b,c,d, got {matrix!r}"
        raise typer.BadParameter(msg, param_hint="MATRIX")
    return parsed


def _matrix_table(title: str, matrix: Matrix2D | None) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column(justify="right")
    table.add_column(justify="right")
    if matrix is None:
        table.add_row("—", "—")
        table.add_row("—", "—")
    else:
        table.add_row(f"{matrix.a:.3f}", f"{matrix.b:.3f}")
        table.add_row(f"{matrix.c:.3f}", f"{matrix.d:.3f}")
    return table


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
) -> None:
    """Eigen Lab - 2×2 eigendecomposition explorer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@app.command()  # type: ignore[misc]
def eigen(matrix: MatrixArgument = None, preset: PresetOption = None) -> None:
    """Display the characteristic equation, eigenvalues and eigenvectors."""
    m = _load_matrix(matrix, preset)
    eigenvalues = m.eigenvalues()

    console.print(_matrix_table("A", m))
    console.print(
        f"Characteristic equation: λ² − {m.trace():.3f}λ + {m.determinant():.3f} = 0"
    )
    console.print(f"Discriminant: {m.discriminant():.3f}")

    if eigenvalues.is_complex:
        l1, l2 = eigenvalues.lambda1, eigenvalues.lambda2
        console.print(
            "\n[yellow]Complex eigenvalues:[/] no real eigenvectors exist. "
            "This transformation involves rotation."
        )
        console.print(f"  λ₁ = {l1.real:.3f} + {l1.imag:.3f}i")
        console.print(f"  λ₂ = {l2.real:.3f} - {abs(l2.imag):.3f}i")
        return

    eigenvectors = m.get_eigenvectors()
    table = Table(title="Eigenpairs")
    table.add_column("Pair", style="cyan", no_wrap=True)
    table.add_column("λ", justify="right")
    table.add_column("v", justify="right")
    table.add_column("Scaling", justify="right")

    for index, (vector, value) in enumerate(eigenvectors.pairs(), start=1):
        table.add_row(
            str(index),
            f"{value:.3f}",
            f"[{vector.x:.3f}, {vector.y:.3f}]",
            scaling_label(value),
        )

    console.print(table)


@app.command()  # type: ignore[misc]
def diagonalize(
    matrix: MatrixArgument = None,
    preset: PresetOption = None,
    progress: Annotated[
        float,
        typer.Option("--progress", min=0.0, max=1.0, help="Animation progress"),
    ] = 1.0,
) -> None:
    """Display P, D, P⁻¹ and the staged matrix at a given progress."""
    m = _load_matrix(matrix, preset)
    result: Diagonalization = decompose(m)

    console.print(_matrix_table("A", m))

    if not result.is_diagonalizable:
        console.print(
            "\n[yellow]Not diagonalizable over the reals.[/] "
            "The animation stays at the identity."
        )
        return

    for title, value in (("P", result.P), ("D", result.D), ("P⁻¹", result.Pinv)):
        console.print(_matrix_table(title, value))

    console.print(_matrix_table(f"Current (progress {progress:.2f})", result.current_matrix(progress)))
    console.print(stage_description(progress))


@app.command()  # type: ignore[misc]
def presets() -> None:
    """List the preset transformations."""
    table = Table(title="Preset Transformations")

    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Matrix", justify="right")
    table.add_column("Eigenvalues", justify="right")
    table.add_column("Diagonalizable", justify="center")
    table.add_column("Description")

    for preset in list_presets():
        m = preset.matrix
        eigenvalues = m.eigenvalues()
        if eigenvalues.is_complex:
            values = f"{eigenvalues.lambda1.real:g} ± {eigenvalues.lambda1.imag:g}i"
        else:
            values = f"{eigenvalues.lambda1.real:g}, {eigenvalues.lambda2.real:g}"
        diagonalizable = decompose(m).is_diagonalizable

        table.add_row(
            preset.name.value,
            f"[{m.a:g} {m.b:g}; {m.c:g} {m.d:g}]",
            values,
            "✓" if diagonalizable else "✗",
            preset.description,
            style="" if diagonalizable else "dim",
        )

    console.print(table)


@app.command()  # type: ignore[misc]
def frames(
    matrix: MatrixArgument = None,
    preset: PresetOption = None,
    num_frames: Annotated[
        int,
        typer.Option("--frames", "-n", min=2, help="Number of frames"),
    ] = 60,
    mode: Annotated[
        FrameMode,
        typer.Option("--mode", "-m", help="Animation to export"),
    ] = FrameMode.DIAGONALIZE,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSON here instead of stdout"),
    ] = None,
) -> None:
    """Export animation frames as JSON for an alternate front end."""
    m = _load_matrix(matrix, preset)

    if mode is FrameMode.MORPH:
        sampled = morph_frames(m, num_frames)
        header: dict = {"eigenvalues": m.eigenvalues().to_dict()}
    else:
        result = decompose(m)
        sampled = diagonalization_frames(result, num_frames)
        header = {"diagonalization": result.to_dict()}

    payload = {
        "mode": mode.value,
        "matrix": m.to_dict(),
        **header,
        "frames": [frame.to_dict() for frame in sampled],
    }
    text = json.dumps(payload, indent=2, ensure_ascii=False)

    if output is None:
        typer.echo(text)
    else:
        output.write_text(text)
        console.print(f"Wrote {len(sampled)} frames to [bold]{output}[/]")


if __name__ == "__main__":
    app()
