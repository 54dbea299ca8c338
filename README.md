# vegsim

A procedural tree growth simulation. A plant is grown metamer by metamer
inside a bounding box: buds gather light from the space around them, light
becomes resources, resources flow toward the tips, and buds with enough
resources sprout new shoots. Branches that leave the box or gather too little
light per metamer are shed, branch widths follow a pipe model, and pruning
rules can be applied along the way, including an automatic espalier
(spalier) training mode.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Concepts

- **Metamer** (`vegsim.metamer.Metamer`): one internode with a terminal bud
  and an auxillary bud at its tip. A bud that has grown is replaced by the
  chain of metamers it produced (`terminal_metamer`, `auxillary_metamer`).
  Useful queries: `count_metamers()`, `total_metamers()` (bare buds at the
  tips), `longest_path()`, `bounding_volume()`, `get_metamer_by_id()`, and
  pruning with `prune_terminal()`, `prune_auxillary()` and `prune_id()`.
- **Plant** (`vegsim.plant.Plant`): a root metamer grown from a seed position
  along a hidden vertical support pole, with its `PlantGenetics` and a
  `ResourceDistributor`. `perform_growth_iteration(environment)` gathers
  light, converts it to resources (`borchert_honda_alpha * light`), spreads
  them, adds shoots, sheds weak branches and thickens the branches.
- **Environment** (`vegsim.environment.Environment`): divides a
  `BoundingVolume` into a grid and estimates light and a preferred growth
  direction for each bud, in one of two `SpaceDividingMode`s:
  - `MARKERS` — space-colonisation markers (`vegsim.markerset.MarkerSet`):
    a bud gets light 1 if it owns at least one marker in its perception
    cone, else 0.
  - `SHADOW_VOXELS` (default) — a shadow grid
    (`vegsim.shadowvoxelset.ShadowVoxelSet`): every metamer tip casts a
    pyramid of shadow downward, and light is `max(C - shadow + A, 0)`.
- **Resource distribution** (`vegsim.resourcedistributor.ResourceDistributor`),
  in one of the `DistributionMode`s `BORCHERT_HONDA` (default),
  `PRIORITY_LIST` or `NONE`. The helpers `borchert_honda_split()` and
  `priority_list_weight()` are exposed as functions.
- **Genetics** (`vegsim.plantgenetics.PlantGenetics`): the per-plant values,
  defaulting to the constants in `vegsim.parameters`.
- **Pruning** (`vegsim.pruning`): `prune_by_rule(rule, plant)` with a
  `PruneOperation` (`OP0`–`OP5`, `SPIL_1`–`SPIL_3`; `OP0` and `SPIL_3` do
  nothing), plus `short_metamer_length()` and `short_metamer_buds()`.
  `vegsim.spalier.AutopruneSpalier` trains the plant into layers of
  `PASS_LENGTH` trunk metamers with supported side branches to the left and
  right.
- **Simulation** (`vegsim.treeapp.TreeApp`): one plant in a 50×50×50 box,
  with a growth counter, the selected id, the optional espalier mode and the
  positions of claimed markers (`marker_points`).
- **Controller** (`vegsim.controller.Controller`): serialises actions on a
  `TreeApp` behind a lock and keeps a snapshot of the selected metamer.

Randomness comes from a seeded PCG32 generator shared by the whole package
(`vegsim.rng`, seed `vegsim.parameters.SEED`), so runs are reproducible;
`vegsim.rng.reset()` restarts the sequence, and `TreeApp.reset_plants()`
does so before replanting.

## Usage

The default grid resolution is 100 cells per side (a million markers and
voxels), which takes a while to build. A coarser grid is handy for
experiments:

```python
from vegsim.controller import Controller
from vegsim.pruning import PruneOperation
from vegsim.treeapp import TreeApp
from vegsim.treeparameter import (
    DistributionMode,
    GeneticKind,
    GeneticParameter,
    SpaceDividingMode,
    TreeParameter,
)

app = TreeApp(resolution=20)
controller = Controller(app)

for _ in range(5):
    controller.perform_growth_iteration()

# Switch to marker-based space division and the priority-list model.
controller.update_tree_param(TreeParameter.space_dividing_mode(SpaceDividingMode.MARKERS))
controller.update_tree_param(
    TreeParameter.resource_distribution_mode(DistributionMode.PRIORITY_LIST)
)

# Change a genetic parameter and regrow the plant from scratch with it.
controller.update_tree_param(
    TreeParameter.genetic(GeneticParameter(GeneticKind.BORCHERT_HONDA_ALPHA, 2.5))
)
controller.recalculate_plants()

# Read a setting back.
current = controller.get_tree_param(
    TreeParameter.genetic(GeneticParameter(GeneticKind.BORCHERT_HONDA_ALPHA))
)
print(current.value.value)  # 2.5

# Train the plant as an espalier on every following growth iteration.
controller.update_tree_param(TreeParameter.prune_mod_on(True))

# Apply a pruning rule by hand.
controller.perform_prune(PruneOperation.OP1)

# Select a metamer by id; the root metamer has id 1.
controller.update_selected(1)
print(controller.selected_metamer)
```

`TreeParameter` can also be built directly as
`TreeParameter(TreeParameterKind.…, value)`; a value of the wrong type for
the kind raises `TypeError`.

A single plant can be driven without a `TreeApp`:

```python
from vegsim.boundingvolume import BoundingVolume
from vegsim.environment import Environment
from vegsim.plant import Plant
from vegsim.plantgenetics import PlantGenetics
from vegsim.vector import Vec3

volume = BoundingVolume()
volume.include_point(Vec3(-25.0, 0.0, 0.0))
volume.include_point(Vec3(25.0, 50.0, 50.0))

environment = Environment(volume, resolution=20)
plant = Plant(Vec3(0.0, 0.0, 25.0), PlantGenetics())
for _ in range(3):
    plant.perform_growth_iteration(environment)

print(plant.root.longest_path(), plant.root.total_metamers())
```

Progress of each growth iteration is reported through the standard `logging`
module at INFO level (loggers `vegsim.plant` and `vegsim.treeapp`).

## What it does not do

There is no window, 3D view or user interface, and no command-line program;
nothing is rendered or saved to disk. For display, the package only prepares
data: `Plant.collect_branchdata()` returns every segment as a `BranchData`
(start and end points, widths, colour — blue when selected — and id),
`TreeApp.marker_points` holds the positions of claimed markers, and
`TreeApp.debug_texture(layer)` returns one horizontal shadow-voxel layer as
a list of grey `Color` values indexed `z * width + x`.