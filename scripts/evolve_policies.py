"""
Neuro-evolution of Arena Policies

Every generation the whole population plays one battle royale against each
other. Fitness rewards survival time and the longest body reached; the best
policies are kept and mutated to refill the population.

Usage:
    python scripts/evolve_policies.py --population 20 --generations 100
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import argparse
import time

import torch

from arena.config import GameConfig
from arena.evaluation import run_tournament
from arena.policy import NetworkPlayer, PolicyMLP, mutate_policy, save_policy
from arena.utils import set_seed


class EvolutionTrainer:
    """
    Truncation-selection evolution of PolicyMLP weights
    """

    def __init__(
        self,
        population: int = 20,
        elite: int = 5,
        sigma: float = 0.1,
        rounds: int = 1000,
        config: GameConfig = None,
        output_dir: str = "results/policies",
        seed: int = 67
    ):
        self.population_size = population
        self.elite = elite
        self.sigma = sigma
        self.rounds = rounds
        self.config = config or GameConfig()
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.seed = seed

        set_seed(seed)
        self.generator = torch.Generator().manual_seed(seed)

        input_dim = self.config.vision_depth * 5 + 1
        self.population = [PolicyMLP(input_dim=input_dim) for _ in range(population)]
        self.best_fitness = float('-inf')

    def evaluate(self, generation: int):
        """Fitness per policy from one shared game"""
        players = [NetworkPlayer(network) for network in self.population]
        # Board and food scale with the population
        size = max(self.population_size * 3, self.config.min_size)
        results = run_tournament(
            players,
            height=size,
            width=size,
            food_count=min(self.population_size * 20, (size - 2) ** 2 // 4),
            rounds=self.rounds,
            config=self.config,
            seed=self.seed + generation
        )
        return [results[i].fitness for i in range(len(self.population))]

    def train(self, generations: int):
        start_time = time.time()

        for generation in range(generations):
            fitness = self.evaluate(generation)
            ranked = sorted(range(len(fitness)), key=lambda i: fitness[i], reverse=True)
            round_best = fitness[ranked[0]]

            print(f"gen {generation} \t sum {sum(fitness):.3f} \t avg {sum(fitness) / len(fitness):.3f} "
                  f"\t best {round_best:.3f} \t alltime {max(self.best_fitness, round_best):.3f}")

            if round_best > self.best_fitness:
                self.best_fitness = round_best
                save_policy(
                    self.population[ranked[0]],
                    str(self.output_dir / "best.pt"),
                    {'fitness': round_best, 'generation': generation}
                )

            parents = [self.population[i] for i in ranked[:self.elite]]
            children = []
            while len(parents) + len(children) < self.population_size:
                parent = parents[len(children) % len(parents)]
                children.append(mutate_policy(parent, sigma=self.sigma, generator=self.generator))
            self.population = parents + children

        elapsed = time.time() - start_time
        print(f"\nTraining complete in {elapsed:.1f}s, best fitness {self.best_fitness:.3f}")
        print(f"Best policy saved to {self.output_dir / 'best.pt'}")


def main():
    parser = argparse.ArgumentParser(description='Evolve arena policies')
    parser.add_argument('--population', type=int, default=20, help='Policies per generation')
    parser.add_argument('--elite', type=int, default=5, help='Policies kept each generation')
    parser.add_argument('--generations', type=int, default=100, help='Number of generations')
    parser.add_argument('--sigma', type=float, default=0.1, help='Mutation noise')
    parser.add_argument('--rounds', type=int, default=1000, help='Maximum rounds per game')
    parser.add_argument('--life-decrement', type=float, default=0.02, help='Life lost per move')
    parser.add_argument('--output-dir', type=str, default='results/policies', help='Output directory')
    parser.add_argument('--seed', type=int, default=67, help='Random seed')

    args = parser.parse_args()

    trainer = EvolutionTrainer(
        population=args.population,
        elite=args.elite,
        sigma=args.sigma,
        rounds=args.rounds,
        config=GameConfig(life_decrement=args.life_decrement),
        output_dir=args.output_dir,
        seed=args.seed
    )
    trainer.train(args.generations)


if __name__ == '__main__':
    main()
