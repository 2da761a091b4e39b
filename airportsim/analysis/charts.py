"""Charts for simulation results."""

import matplotlib.pyplot as plt

from ..simulation.driver import SimulationResult


class ChartGenerator:
    """Generate static charts from simulation results."""
    
    def generate_queue_chart(
        self,
        result: SimulationResult,
        output_path: str,
    ) -> str:
        """
        Generate queue depth time series chart.
        
        Args:
            result: Simulation result
            output_path: Path for output image
        
        Returns:
            Path to output image
        """
        fig, ax = plt.subplots(figsize=(12, 5))
        history = result.queue_history
        
        if history:
            ticks = [s.tick for s in history]
            series = [
                ('Registration queue', [s.registration_queue for s in history]),
                ('Security queue', [s.security_queue for s in history]),
                ('Waiting at gate', [s.waiting_at_gate for s in history]),
            ]
            for label, values in series:
                ax.step(ticks, values, where='post', linewidth=1.5, label=label)
            
            for d in result.departures:
                ax.axvline(d.tick, color='grey', linestyle=':', alpha=0.6)
            
            ax.legend(loc='upper right')
        else:
            ax.text(0.5, 0.5, 'No data', ha='center', va='center', transform=ax.transAxes)
        
        ax.set_xlabel('Tick')
        ax.set_ylabel('Passengers')
        ax.set_title('Queue depth per tick')
        ax.grid(True, alpha=0.3)
        
        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        
        return output_path
    
    def generate_load_factor_chart(
        self,
        result: SimulationResult,
        output_path: str,
    ) -> str:
        """
        Generate boarded/missed bar chart per departed flight.
        
        Args:
            result: Simulation result
            output_path: Path for output image
        
        Returns:
            Path to output image
        """
        fig, ax = plt.subplots(figsize=(10, 5))
        departures = result.departures
        
        if departures:
            labels = [d.flight_number for d in departures]
            boarded = [d.boarded for d in departures]
            missed = [d.missed for d in departures]
            capacity = [d.capacity for d in departures]
            
            x = range(len(labels))
            ax.bar(x, boarded, label='Boarded', color='#3498db')
            ax.bar(x, missed, bottom=boarded, label='Missed', color='#e74c3c')
            ax.scatter(x, capacity, marker='_', s=400, color='black', label='Capacity', zorder=3)
            ax.set_xticks(list(x))
            ax.set_xticklabels(labels)
            ax.legend()
        else:
            ax.text(0.5, 0.5, 'No departures', ha='center', va='center', transform=ax.transAxes)
        
        ax.set_ylabel('Passengers')
        ax.set_title('Passengers per departed flight')
        ax.grid(True, axis='y', alpha=0.3)
        
        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        
        return output_path
