# rushhour

A small top-down city driving game on a 20 × 20 grid of roads and buildings,
drawn with pygame. You play as either a **taxi driver** or a **delivery
driver**. A taxi driver picks up passengers and drives them to their
destinations. A delivery driver collects packages and drops them where they
need to go. Each finished job pays money, and you spend that money on fuel.
Computer-driven traffic, trees and boxes cost you points when you run into
them.

## Installing

```
pip install .
```

This also installs pygame, which the game needs. To run the tests, install
the `test` extra (`pip install .[test]`) and run `pytest`.

## Playing

```
rushhour
```

Options:

- `--scores PATH`: the high-score file (default `highscores.dat` in the
  working directory)
- `--seed N`: seed for the random layout of stations, obstacles, fares and
  traffic

The start menu offers:

1. Start Game: then choose *Taxi Driver*, *Delivery Driver* or *Random Selection*
2. View Leaderboard

After you pick a mode, type your name and press **Enter** to start.

### Controls

| Key         | Action                                                  |
|-------------|---------------------------------------------------------|
| Arrow keys  | Drive one cell in that direction                        |
| Space       | Pick up or drop off a passenger / package               |
| P           | Open the role menu while standing on the grey station   |
| 1 / 2       | In the role menu: become a taxi / delivery driver       |
| Esc         | Pause / resume, or close the role menu                  |

### Rules

- A game lasts 180 seconds.
- Each move uses 0.5 units of a 100-unit tank. When you drive onto an orange
  fuel station, it fills the tank with as much fuel as your money can buy, at
  2 per unit.
- A taxi picks up a passenger standing on its own cell. A delivery van picks
  up a package on its own cell or on any of the eight cells around it. Once
  you are carrying a fare, its destination is marked with a green circle.
  Press Space on that cell to drop the fare off.
- Each delivered passenger scores 10 points and each delivered package scores
  20 points. Both also pay a fare.
- Each hit costs points: an obstacle costs 2, another car costs 3, and a
  passenger or package that you are not carrying costs 5 (only while you are
  already carrying one). After a hit, the same object does not cost points
  again until a short cooldown has passed.
- After every second completed job, the traffic speeds up and another car
  joins it.
- The game ends when you reach 100 points, your score goes below zero, the
  fuel runs out, or time is up.
- The grey station in the bottom-left corner lets you switch between taxi and
  delivery work. Your position and fuel stay the same, but the waiting fares
  are replaced.

The ten best results are kept in the high-score file and shown on the
leaderboard screen.

Sound effects (`collision.wav`, `dropped.wav`, `gameover.wav`, looked up in
the working directory) are played with the `aplay` command-line player. If
`aplay` is not installed, the game runs silently.

## What it does not do

- Once the game-over or leaderboard screen is showing, there is no key that
  goes back to the menu. Close the window and start `rushhour` again.
- Keys are read one press at a time. Holding an arrow key down does not keep
  the car moving.

## Using it as a library

The game logic does not need a window:

```python
import random
from rushhour.engine import GameEngine
from rushhour.constants import GameState, Direction

engine = GameEngine("scores.dat", random.Random(1))
engine.switch_game_state(GameState.PLAYING)
engine.player.car.move(Direction.DOWN, engine.board)
engine.update()
print(engine.player.score, engine.player.car.fuel_level)
```

The main pieces are:

- `rushhour.engine.GameEngine`: owns everything else
- `rushhour.board.Board`: the city and everything placed on it
- `rushhour.player.Player`: the person playing
- `rushhour.cars`: `TaxiCar`, `DeliveryCar` and `NPCCar`
- `rushhour.game.Game`: the state machine and the end conditions
- `rushhour.scores.Leaderboard`: the high-score table
- `rushhour.app.GameController`: turns key presses and timer ticks into game
  actions, and `run()` opens the pygame window