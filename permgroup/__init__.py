from .chain import (Level, StabilizerChain, build_stabilizer_chain, contains,
                    order)
from .config import Config, configure, get_config, set_config
from .errors import (ConvergenceFailure, DegreeMismatch, InvalidPermutation,
                     NotInGroup, OutOfRange, PermutationGroupError,
                     PointNotInOrbit)
from .generating_set import GeneratingSet
from .groups import (AlternatingGroup, CyclicGroup, DihedralGroup,
                     PermutationGroup, SymmetricGroup)
from .orbit import Orbit, orbits
from .permutation import (Permutation, apply, compose, cycle_decomposition,
                          inverse, is_identity, permute, random_permutation)
from .schreier_sims import (random_schreier_sims, schreier_sims,
                            schreier_sims_incremental)
from .version import __version__
