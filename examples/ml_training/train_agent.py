#!/usr/bin/env python3
"""
ML Training Example

This example demonstrates how to:
1. Use the Gymnasium-compatible environment
2. Implement a simple training loop
3. Access observations and rewards
4. Track training progress

Note: This example uses a heuristic policy. For real training, replace
it with an actual RL algorithm (e.g., from Stable-Baselines3).

Run with: python train_agent.py
"""

import numpy as np
from hillclimb.ml import HillClimbEnv, HillClimbEnvConfig


def simple_policy(observation: np.ndarray) -> np.ndarray:
    """A simple heuristic policy for demonstration.

    This is NOT a trained policy - just a demonstration of the interface.
    """
    sin_rotation = observation[2]
    on_ground = observation[5] > 0

    # Nose diving in the air: pull back
    if not on_ground and sin_rotation > 0.5:
        return np.array([0, 1, 0], dtype=np.int8)
    return np.array([1, 0, 0], dtype=np.int8)


def main():
    print("=" * 60)
    print("HillClimb ML Training Example")
    print("=" * 60)

    # Step 1: Create environment
    print("\n1. Creating environment...")
    config = HillClimbEnvConfig(max_episode_ticks=1800)  # 30 second episodes
    env = HillClimbEnv(config)

    print(f"   Observation space: {env.observation_space}")
    print(f"   Action space: {env.action_space}")

    # Step 2: Run episodes
    print("\n2. Running training episodes...")

    num_episodes = 5
    episode_rewards = []
    episode_lengths = []

    for episode in range(num_episodes):
        obs, info = env.reset(seed=episode)
        total_reward = 0.0
        steps = 0

        done = False
        while not done:
            action = simple_policy(obs)
            obs, reward, terminated, truncated, info = env.step(action)

            total_reward += reward
            steps += 1
            done = terminated or truncated

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)

        print(f"   Episode {episode + 1}: "
              f"Reward = {total_reward:.2f}, "
              f"Steps = {steps}, "
              f"Distance = {info['score']:.0f} m, "
              f"End = {info.get('end_reason', 'time limit')}")

    env.close()

    # Step 3: Display training statistics
    print("\n3. Training Statistics:")
    print(f"   Episodes: {num_episodes}")
    print(f"   Mean Reward: {np.mean(episode_rewards):.2f}")
    print(f"   Std Reward: {np.std(episode_rewards):.2f}")
    print(f"   Mean Length: {np.mean(episode_lengths):.0f} steps")

    print("\n" + "=" * 60)
    print("Training example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
